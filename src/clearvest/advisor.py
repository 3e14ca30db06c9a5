"""Rule-based chat assistant that talks through the computed fee figures.

Replies are canned templates filled with numbers from the priced holdings;
no model or network call is involved. The first intent whose keywords appear
in the message answers it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .calculation.portfolio_summary import GROWTH_RATE, OPTIMIZED_COST_RATE, costs_by_broker
from .models import AdvisorResponse, PricedHolding

EXPENSIVE_COST_PERCENT = 0.8
REFERENCE_PORTFOLIO = 100000


@dataclass(frozen=True)
class _PortfolioFacts:
    holdings: Sequence[PricedHolding]
    total_value: float
    total_cost: float
    expensive: List[PricedHolding]
    highest: Optional[PricedHolding]

    @property
    def average_cost_percent(self) -> float:
        return self.total_cost / self.total_value * 100 if self.total_value > 0 else 0.0

    @property
    def potential_savings(self) -> float:
        return sum(_saving(holding) for holding in self.expensive)


def _saving(holding: PricedHolding) -> float:
    return holding.total_annual_cost - holding.amount * OPTIMIZED_COST_RATE


def _facts(holdings: Sequence[PricedHolding]) -> _PortfolioFacts:
    highest = max(holdings, key=lambda h: h.cost_percent) if holdings else None
    return _PortfolioFacts(
        holdings=holdings,
        total_value=sum(h.amount for h in holdings),
        total_cost=sum(h.total_annual_cost for h in holdings),
        expensive=[h for h in holdings if h.cost_percent > EXPENSIVE_COST_PERCENT],
        highest=highest,
    )


def _verdict(average_cost_percent: float) -> str:
    if average_cost_percent > 1:
        return "Your fees are quite high!"
    if average_cost_percent > 0.5:
        return "There's room for optimization."
    return "Your fees are reasonable."


def _compound(rate: float, years: int) -> float:
    return REFERENCE_PORTFOLIO * (1 + GROWTH_RATE - rate) ** years


# ========================================================================================
# INTENTS
# ========================================================================================

def _biggest_concern(facts: _PortfolioFacts) -> AdvisorResponse:
    if not facts.holdings:
        return AdvisorResponse(
            "Upload your portfolio first so I can identify your biggest cost concerns. Common issues include:\n\n"
            "- **High TER funds** (>1% annually)\n- **Expensive brokers** with high FX markups\n"
            "- **Frequent trading** generating fees\n- **Platform fees** eating into returns",
            ["What are typical fee ranges?", "How to choose a low-cost broker?", "Best practices for fee reduction"],
        )

    costliest = max(facts.holdings, key=lambda h: h.total_annual_cost)
    broker, broker_cost = next(iter(costs_by_broker(facts.holdings).items()))
    return AdvisorResponse(
        f"**Your biggest cost concerns**:\n\n"
        f"1. **Highest cost asset**: {costliest.symbol}\n"
        f"   - Annual cost: €{costliest.total_annual_cost:.2f}\n"
        f"   - Cost rate: {costliest.cost_percent:.2f}%\n\n"
        f"2. **Most expensive broker**: {broker}\n"
        f"   - Total annual fees: €{broker_cost:.2f}\n\n"
        f"**Overall portfolio**: {facts.average_cost_percent:.2f}% annual fees. {_verdict(facts.average_cost_percent)}",
        [f"Replace {costliest.symbol}", "Show me broker alternatives", "Calculate potential savings",
         "Long-term impact analysis"],
    )


def _fees(facts: _PortfolioFacts) -> AdvisorResponse:
    if not facts.holdings:
        return AdvisorResponse(
            "To analyze your fees, please upload your portfolio first. Investment fees typically include:\n\n"
            "- **TER (Total Expense Ratio)**: Annual fund management fee\n"
            "- **Trading fees**: Cost per transaction\n"
            "- **FX markup**: Foreign exchange conversion fees\n"
            "- **Platform fees**: Broker maintenance charges",
            ["How much do fees impact returns?", "What's a good TER for ETFs?", "How to choose a low-cost broker?"],
        )

    action = (
        f"Consider replacing {len(facts.expensive)} high-cost assets."
        if facts.expensive else "Focus on maintaining low costs."
    )
    return AdvisorResponse(
        f"Your portfolio analysis shows:\n\n"
        f"**Total annual fees**: €{facts.total_cost:.2f}\n"
        f"**Average fee rate**: {facts.average_cost_percent:.2f}%\n"
        f"**Highest cost asset**: {facts.highest.symbol} ({facts.highest.cost_percent:.2f}%)\n\n"
        f"{_verdict(facts.average_cost_percent)} {action}",
        ["Which assets should I replace?", "Show me low-cost alternatives", "How much could I save?",
         "What's the impact over 20 years?"],
    )


def _reduce(facts: _PortfolioFacts) -> AdvisorResponse:
    if not facts.holdings:
        return AdvisorResponse(
            "Proven strategies to reduce investment fees:\n\n"
            "- **Choose low-cost ETFs** (TER < 0.3%)\n"
            "- **Use discount brokers** (Interactive Brokers, Trade Republic)\n"
            "- **Avoid currency conversion** when possible\n"
            "- **Buy and hold** to minimize trading fees\n"
            "- **Consolidate brokers** to reduce platform fees",
            ["Best low-cost ETFs for beginners", "How to choose a broker?",
             "What's the difference between ETFs and mutual funds?"],
        )

    savings = facts.potential_savings
    actions = "\n".join(
        f"- Replace {h.symbol} -> Save ~€{_saving(h):.0f}/year" for h in facts.expensive[:3]
    ) or "- No high-cost positions found"
    if savings > 500:
        impact = "High impact opportunity!"
    elif savings > 100:
        impact = "Moderate savings available."
    else:
        impact = "Already well optimized."
    return AdvisorResponse(
        f"Here's how to optimize your portfolio:\n\n**Immediate actions**:\n{actions}\n\n"
        f"**Potential annual savings**: €{savings:.2f}\n"
        f"**20-year impact**: €{savings * 20 * (1 + GROWTH_RATE):.0f} (with {GROWTH_RATE:.0%} growth)\n\n{impact}",
        ["Show specific alternatives", "How to switch investments?", "Tax implications of switching",
         "Best timing for changes"],
    )


def _replacement_for(holding: PricedHolding) -> str:
    if "FCNTX" in holding.symbol or "Fund" in holding.symbol:
        return f"{holding.symbol} -> VWCE (Global ETF, 0.22% TER)"
    if "US" in holding.symbol or "AAPL" in holding.symbol:
        return f"{holding.symbol} -> CSPX (S&P 500 ETF, 0.07% TER)"
    return f"{holding.symbol} -> VWCE (Global diversification, 0.22% TER)"


def _replace(facts: _PortfolioFacts) -> AdvisorResponse:
    if not facts.holdings:
        return AdvisorResponse(
            "Popular low-cost alternatives by category:\n\n"
            "- **Global equity**: VWCE (0.22% TER)\n- **US market**: CSPX or VUSA (0.07% TER)\n"
            "- **European market**: VEUR (0.12% TER)\n- **Bonds**: AGGH (0.10% TER)",
            ["Explain VWCE vs IWDA", "Best broker for these ETFs", "How to build a simple portfolio"],
        )

    replacements = "\n".join(_replacement_for(h) for h in facts.expensive[:3]) or "No high-cost assets to replace."
    return AdvisorResponse(
        f"**Recommended replacements**:\n\n{replacements}\n\n"
        "**Benefits**: lower ongoing costs, better diversification, higher liquidity.\n\n"
        "**Before switching**: check tax implications and timing!",
        ["Tax-efficient switching strategy", "How to research ETFs", "Timing the transition",
         "Broker transfer process"],
    )


def _brokers(facts: _PortfolioFacts) -> AdvisorResponse:
    if not facts.holdings:
        return AdvisorResponse(
            "**Top low-cost brokers**:\n\n"
            "1. **Interactive Brokers**: Best for large portfolios\n"
            "2. **Trade Republic**: Great for Europeans\n"
            "3. **Degiro**: Solid all-rounder\n\n"
            "**Key factors**: trading fees, FX markup rates, platform/custody fees, available markets.",
            ["Interactive Brokers vs Trade Republic", "How to evaluate broker costs", "Account transfer process",
             "Regulatory safety comparison"],
        )

    counts = {}
    for holding in facts.holdings:
        counts[holding.broker_name] = counts.get(holding.broker_name, 0) + 1
    top = list(costs_by_broker(facts.holdings).items())[:3]
    summary = "\n".join(f"- **{name}**: €{cost:.2f}/year ({counts[name]} assets)" for name, cost in top)
    return AdvisorResponse(
        f"**Your broker analysis**:\n\n{summary}\n\n"
        "**Recommended brokers**:\n"
        "- **Interactive Brokers**: Lowest FX fees (0.02%)\n"
        "- **Trade Republic**: €1 trading, no platform fees\n"
        "- **Degiro**: €2 trading, good for Europeans\n\n"
        "Consider consolidating to reduce platform fees!",
        ["How to transfer between brokers?", "Compare broker fees", "Best broker for my country",
         "Consolidation strategy"],
    )


def _long_term(facts: _PortfolioFacts) -> AdvisorResponse:
    current = facts.average_cost_percent / 100 if facts.total_value > 0 else 0.015
    difference = _compound(OPTIMIZED_COST_RATE, 30) - _compound(current, 30)
    return AdvisorResponse(
        f"**Long-term fee impact** (€{REFERENCE_PORTFOLIO:,} portfolio):\n\n"
        f"**Current fees ({current * 100:.1f}%)**:\n"
        f"- 10 years: €{_compound(current, 10):.0f}\n"
        f"- 20 years: €{_compound(current, 20):.0f}\n"
        f"- 30 years: €{_compound(current, 30):.0f}\n\n"
        f"**Optimized fees ({OPTIMIZED_COST_RATE:.1%})**:\n"
        f"- 30 years: €{_compound(OPTIMIZED_COST_RATE, 30):.0f}\n\n"
        f"**Difference**: €{difference:.0f} over 30 years!",
        ["How to calculate my specific impact?", "Compound interest explanation", "Fee optimization checklist",
         "When to review and rebalance?"],
    )


def _beginner(facts: _PortfolioFacts) -> AdvisorResponse:
    return AdvisorResponse(
        "**Investment fundamentals**:\n\n"
        "1. **Start simple**: a global ETF (VWCE) covers everything\n"
        "2. **Keep costs low**: target <0.5% total fees\n"
        "3. **Automate**: set up monthly investments\n"
        "4. **Stay diversified**\n"
        "5. **Think long-term**: time in market beats timing the market",
        ["Build a simple 3-ETF portfolio", "How much to invest monthly?", "Emergency fund vs investing",
         "Tax-advantaged accounts"],
    )


def _default(facts: _PortfolioFacts) -> AdvisorResponse:
    if facts.holdings:
        return AdvisorResponse(
            f"I can help you optimize your portfolio! Your current setup has {len(facts.holdings)} assets "
            f"with an average fee of {facts.average_cost_percent:.2f}%. "
            "What specific aspect would you like to improve?",
            ["Analyze my fees", "Show me alternatives", "How to reduce costs?", "Long-term impact"],
        )
    return AdvisorResponse(
        "I'm here to help you optimize your investments and reduce fees! Upload your portfolio for "
        "personalized advice, or ask me about general investment strategies.",
        ["How to start investing?", "Best low-cost ETFs", "Choosing a broker", "Investment basics"],
    )


def _is_biggest_concern(message: str) -> bool:
    return "biggest" in message and any(word in message for word in ("cost", "concern", "problem"))


def _has_any(*keywords: str) -> Callable[[str], bool]:
    return lambda message: any(keyword in message for keyword in keywords)


_INTENTS: List[Tuple[Callable[[str], bool], Callable[[_PortfolioFacts], AdvisorResponse]]] = [
    (_is_biggest_concern, _biggest_concern),
    (_has_any("fee", "cost", "expensive"), _fees),
    (_has_any("reduce", "lower", "optimize", "save"), _reduce),
    (_has_any("replace", "alternative", "switch", "better"), _replace),
    (_has_any("broker", "platform"), _brokers),
    (_has_any("long term", "20 year", "impact", "compound"), _long_term),
    (_has_any("start", "beginner", "how to"), _beginner),
]


def generate_response(message: str, holdings: Sequence[PricedHolding]) -> AdvisorResponse:
    """Answer a chat message using the priced portfolio (may be empty)."""
    text = message.lower()
    facts = _facts(holdings)
    for matches, respond in _INTENTS:
        if matches(text):
            return respond(facts)
    return _default(facts)
