"""Rule-based answers for the chat assistant.

A question is lower-cased and tested against a fixed keyword table. Every
intent that matches contributes its own paragraph, in table order, below an
unconditional live snapshot. Nothing here touches the store or any shared
state: the same (question, context) always yields the same text.
"""

from __future__ import annotations

from typing import Callable

from intelliwatt.schemas.ai import AIContext
from intelliwatt.schemas.appliance import ApplianceOut
from intelliwatt.utils.numbers import coerce_number, format_number

DEFAULT_RATE_PER_KWH = 15.0
DEFAULT_CURRENCY = "₱"
HOT_ROOM_C = 30.0
MAX_LISTED_HIGH_POWER = 3

# Paragraphs are emitted in this order.
INTENT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("balance", ("balance", "load", "low")),
    ("temperature", ("temp", "temperature", "hot")),
    ("power", ("power", "watt", "usage")),
    ("appliances", ("appliance", "ac", "aircon", "fan", "ref")),
    ("history", ("history", "weekly", "monthly", "daily")),
)

GENERIC_TIPS = (
    "• Use electric fan + ventilation before using aircon.",
    "• Avoid running multiple heavy loads at the same time.",
    "• Turn off/unplug chargers when not in use.",
)


def detect_intents(question: str | None) -> list[str]:
    """Intents whose keywords occur in the question, in table order."""
    q = str(question or "").lower()
    return [
        intent
        for intent, keywords in INTENT_KEYWORDS
        if any(keyword in q for keyword in keywords)
    ]


class _Answer:
    """Holds the per-call formatting parameters and the extracted numbers."""

    def __init__(self, context: AIContext, rate: float, currency: str):
        self.ctx = context
        self.rate = coerce_number(rate)
        self.currency = currency

        self.power_w = coerce_number(context.latest.total_power_w)
        self.temp_c = coerce_number(context.latest.temperature_c)
        self.updated_at = context.latest.updated_at
        self.prepaid = coerce_number(context.balance.prepaid_balance)
        self.low_threshold = coerce_number(context.balance.low_threshold)

        self.appliances = list(context.appliances)
        self.high = [a for a in self.appliances if "high" in (a.category or "").lower()]
        self.medium = [a for a in self.appliances if "medium" in (a.category or "").lower()]
        self.history = list(context.history_last_7_days)

    def money(self, value: float) -> str:
        return f"{self.currency}{coerce_number(value):.2f}"

    def watts(self, value: float) -> str:
        return format_number(coerce_number(value))

    def snapshot(self) -> list[str]:
        lines = [
            f"📍 Live now: {self.watts(self.power_w)} W, {format_number(self.temp_c)} °C, "
            f"balance {self.money(self.prepaid)}."
        ]
        if self.updated_at:
            lines.append(f"🕒 Updated at: {self.updated_at.isoformat()}")
        return lines

    def low_balance_warning(self) -> list[str]:
        if self.ctx.balance.is_low:
            return [
                f"⚠️ Your balance is below the low threshold ({self.money(self.low_threshold)}). "
                "Consider topping up soon."
            ]
        return []

    def balance(self) -> list[str]:
        return [
            f"💳 Prepaid balance: {self.money(self.prepaid)} "
            f"(low threshold: {self.money(self.low_threshold)})."
        ]

    def temperature(self) -> list[str]:
        lines = [f"🌡 Room temperature: {format_number(self.temp_c)} °C."]
        if self.temp_c >= HOT_ROOM_C:
            lines.append(
                "✅ Tip: If you use aircon, set it to 24–26°C and clean filters to reduce power draw."
            )
        return lines

    def power(self) -> list[str]:
        cost_1h = (self.power_w / 1000.0) * self.rate
        return [
            f"⚡ Current total power: {self.watts(self.power_w)} W.",
            f"💡 If you keep {self.watts(self.power_w)}W for 1 hour at "
            f"{self.currency}{format_number(self.rate)}/kWh, estimated cost ≈ {self.money(cost_1h)}.",
        ]

    def appliance_list(self) -> list[str]:
        if not self.appliances:
            return [
                "🧾 You don't have appliances saved yet. "
                "Add appliances so I can identify which ones are heavy users."
            ]
        lines = [f"🧾 Appliances saved: {len(self.appliances)}."]
        if self.high:
            top = _by_wattage(self.high)[:MAX_LISTED_HIGH_POWER]
            listed = ", ".join(f"{a.name} ({self.watts(a.power_w)}W)" for a in top)
            lines.append(f"🔥 High power appliances: {listed}.")
            lines.append(
                "✅ Tip: Use high-power appliances one at a time, "
                "and unplug idle devices when not needed."
            )
        elif self.medium:
            lines.append("✅ Most of your appliances are medium power. Good — focus on reducing runtime.")
        else:
            lines.append("✅ Mostly low-power appliances. Savings will come from reducing hours used.")
        return lines

    def history_summary(self) -> list[str]:
        if not self.history:
            return ["📊 No history yet. Keep posting readings to build daily/weekly/monthly data."]
        total_kwh = sum(coerce_number(r.kwh) for r in self.history)
        total_cost = sum(coerce_number(r.cost) for r in self.history)
        latest = self.history[0]
        return [
            f"📊 Last {len(self.history)} day(s): {total_kwh:.2f} kWh ≈ {self.money(total_cost)}.",
            f"🗓 Latest record ({latest.date}): {coerce_number(latest.kwh):.2f} kWh, "
            f"cost {self.money(latest.cost)}.",
        ]

    def generic_advice(self) -> list[str]:
        lines = ["Here are practical ways to reduce consumption based on your saved data:"]
        if self.high:
            biggest = _by_wattage(self.high)[0]
            lines.append(
                f"• Biggest appliance: {biggest.name} ({self.watts(biggest.power_w)}W). "
                "Reduce its usage time for the biggest savings."
            )
        else:
            lines.append(
                "• You have no “high power” appliances saved. Savings will mostly come "
                "from usage time and avoiding standby power."
            )
        lines.extend(GENERIC_TIPS)
        return lines


def _by_wattage(appliances: list[ApplianceOut]) -> list[ApplianceOut]:
    # sorted() is stable, so equal wattages keep their list order
    return sorted(appliances, key=lambda a: coerce_number(a.power_w), reverse=True)


_PARAGRAPHS: dict[str, Callable[[_Answer], list[str]]] = {
    "balance": _Answer.balance,
    "temperature": _Answer.temperature,
    "power": _Answer.power,
    "appliances": _Answer.appliance_list,
    "history": _Answer.history_summary,
}


def generate_answer(
    question: str | None,
    context: AIContext,
    *,
    rate: float = DEFAULT_RATE_PER_KWH,
    currency: str = DEFAULT_CURRENCY,
) -> str:
    """Answer a free-text question from a context snapshot."""
    answer = _Answer(context, rate, currency)
    intents = detect_intents(question)

    lines = answer.snapshot()
    lines.extend(answer.low_balance_warning())
    for intent in intents:
        lines.extend(_PARAGRAPHS[intent](answer))
    if not intents:
        lines.extend(answer.generic_advice())
    return "\n".join(lines)
