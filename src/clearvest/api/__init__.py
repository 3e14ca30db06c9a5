"""HTTP API for the fee analyzer."""
