"""Prompt templates and request payloads for the generative model."""
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from budgetai.config import settings
from budgetai.models.analysis import ANALYSIS_FIELDS
from budgetai.models.transaction import Budget, Transaction


def _money(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


class PromptBuilder:
    """Builds prompts for the chat and quarterly analysis calls."""

    ANALYSIS_HEADER = """You are a highly skilled financial data analyst with expertise in transaction monitoring and anomaly detection.
IMPORTANT: You must respond with ONLY valid JSON matching the structure specified below. Do not include any other text or markdown formatting.
The response must be a single, complete JSON object with no trailing text.
Do not include arrays for anomaliesOrRedFlags and recommendations - they should be string fields.
"""

    # Word guidance per key, in the order the keys are requested
    ANALYSIS_FIELD_GUIDANCE = {
        "overview": "A comprehensive summary of spending patterns (minimum 300 words)",
        "spendingTrends": "Detailed analysis of spending trends and patterns (minimum 300 words)",
        "categoryAnalysis": "In-depth analysis of spending by category with specific examples (minimum 300 words)",
        "anomaliesOrRedFlags": "Detailed identification of unusual transactions or patterns with explanations (minimum 200 words)",
        "timeBasedInsights": "Comprehensive analysis of spending patterns over time with trend identification (minimum 300 words)",
        "recommendations": "Detailed, actionable recommendations for improvement with specific examples (minimum 300 words)",
        "riskAssessment": "Thorough assessment of financial risks and concerns with mitigation strategies (minimum 200 words)",
        "opportunities": "Detailed analysis of potential opportunities for optimization (minimum 200 words)",
        "futureProjections": "Analysis of future spending patterns and potential impacts (minimum 200 words)",
        "comparativeAnalysis": "Comparison with typical spending patterns and benchmarks (minimum 200 words)",
        "disclaimer": "This analysis is for informational purposes only and not financial advice",
    }

    ANALYSIS_FOOTER = (
        "IMPORTANT: For each section, provide detailed analysis with specific examples, data points, "
        "and actionable insights. Use the transaction data provided to support your analysis. "
        "Do not change the property names from overview to disclaimer."
    )

    def build_chat_prompt(
        self,
        question: str,
        transactions: List[Transaction],
        budgets: List[Budget],
    ) -> str:
        """
        Wrap a user question with the data it should be answered from.

        Args:
            question: The user's question
            transactions: Transactions to include as context
            budgets: Budgets to include as context

        Returns:
            Full prompt text
        """
        lines = ["Analyze these financial details and answer the question:"]

        lines.append("\n[Transactions]")
        for tx in transactions:
            lines.append(
                f"- {tx.transaction_date:%Y-%m-%d}: {tx.payee} "
                f"{_money(tx.amount)} ({', '.join(tx.categories)})"
            )

        lines.append("\n[Budgets]")
        for b in budgets:
            lines.append(
                f"- {b.category}: Spent {_money(b.spend_amount)} of {_money(b.total_amount)} "
                f"({_money(b.remaining)} remaining)"
            )

        lines.append(f"\n[Question]\n{question}")
        lines.append("\n[Instructions]\nProvide a detailed analysis with specific recommendations.")
        return "\n".join(lines) + "\n"

    def build_quarterly_analysis_prompt(
        self,
        transactions: List[Transaction],
        as_of: Optional[datetime] = None,
    ) -> str:
        """
        Build the prompt asking for a full analysis of the last three months.

        Args:
            transactions: Transactions from the last three months (must not be empty)
            as_of: End of the period. Defaults to now (UTC)

        Returns:
            Prompt text ending with the required JSON structure
        """
        as_of = as_of or datetime.now(timezone.utc)
        period_start = as_of - timedelta(days=90)

        expenses = [t for t in transactions if t.amount < 0]
        income = [t for t in transactions if t.amount > 0]
        total_expenses = sum(-t.amount for t in expenses)
        total_income = sum(t.amount for t in income)

        lines = [self.ANALYSIS_HEADER]
        lines.append(
            "Provide a detailed, comprehensive analysis of the transactions from the last 3 months "
            f"(from {period_start:%Y-%m-%d} to {as_of:%Y-%m-%d}). For each section, provide extensive "
            "analysis with specific examples and detailed explanations:"
        )

        lines.append("\nLast 3 Months Financial Summary:")
        lines.append(f"- Total Income: ${total_income:.2f} ({len(income)} transactions)")
        lines.append(f"- Total Expenses: ${total_expenses:.2f} ({len(expenses)} transactions)")
        lines.append(f"- Net Savings: {_money(total_income - total_expenses)}")

        lines.extend(self._category_breakdown(income, "Income", total_income))
        lines.extend(self._category_breakdown(expenses, "Expense", total_expenses))
        lines.extend(self._daily_pattern(income, "Income"))
        lines.extend(self._daily_pattern(expenses, "Expense"))

        lines.append("\nDetailed Transactions:")
        for tx in sorted(transactions, key=lambda t: t.transaction_date, reverse=True):
            kind = "Expense" if tx.is_expense else "Income"
            lines.append(
                f"- {tx.transaction_date:%Y-%m-%d}: {kind} ${abs(tx.amount):.2f} "
                f"[{tx.primary_category}] {tx.payee}"
            )

        lines.append("\nRequired JSON Response Structure (EXACTLY AS SHOWN, DO NOT CHANGE PROPERTY NAMES):")
        lines.append("{")
        keys = [spec.key for spec in ANALYSIS_FIELDS]
        for i, key in enumerate(keys):
            comma = "," if i < len(keys) - 1 else ""
            lines.append(f'  "{key}": "{self.ANALYSIS_FIELD_GUIDANCE.get(key, "")}"{comma}')
        lines.append("}")

        lines.append("\n" + self.ANALYSIS_FOOTER)
        return "\n".join(lines)

    def _category_breakdown(self, transactions: List[Transaction], kind: str, total: float) -> List[str]:
        groups = defaultdict(list)
        for tx in transactions:
            groups[tx.primary_category].append(tx)

        rows = []
        for category, txs in groups.items():
            amount = sum(abs(t.amount) for t in txs)
            pct = amount / total * 100 if total > 0 else 0.0
            rows.append((category, amount, len(txs), pct))
        rows.sort(key=lambda r: r[1], reverse=True)

        lines = [f"\n{kind} Category Analysis:"]
        for category, amount, count, pct in rows:
            lines.append(f"- {category}: ${amount:.2f} ({count} transactions, {pct:.1f}%)")
        return lines

    def _daily_pattern(self, transactions: List[Transaction], kind: str) -> List[str]:
        daily = defaultdict(float)
        for tx in transactions:
            daily[tx.transaction_date.date()] += abs(tx.amount)

        lines = [f"\nDaily {kind} Pattern:"]
        for day in sorted(daily):
            lines.append(f"- {day:%Y-%m-%d}: ${daily[day]:.2f}")
        return lines

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        """Request body for both ``generateContent`` and ``streamGenerateContent``."""
        return {
            "contents": [
                {
                    "parts": [{"text": prompt}],
                    "role": "user",
                }
            ],
            "generation_config": {
                "temperature": settings.temperature,
                "top_p": settings.top_p,
                "top_k": settings.top_k,
                "max_output_tokens": settings.max_output_tokens,
            },
        }
