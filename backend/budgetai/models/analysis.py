"""Quarterly analysis record and the field tables used to build it."""
from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field


class FieldSpec(BaseModel):
    """One analysis field: its primary key, accepted aliases and default sentence."""

    model_config = ConfigDict(frozen=True)

    attribute: str = Field(..., description="Attribute name on AnalysisRecord")
    aliases: Tuple[str, ...] = Field(..., min_length=1, description="Accepted keys, primary key first")
    default: str = Field(..., description="Sentence used when the model left the field empty")

    @property
    def key(self) -> str:
        return self.aliases[0]


ANALYSIS_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(
        attribute="overview",
        aliases=("overview", "summary"),
        default="No overview provided",
    ),
    FieldSpec(
        attribute="spending_trends",
        aliases=("spendingTrends", "spending_trends", "spendingPatterns"),
        default="No spending trends identified",
    ),
    FieldSpec(
        attribute="category_analysis",
        aliases=("categoryAnalysis", "category_analysis", "categoryBreakdown"),
        default="No category analysis available",
    ),
    FieldSpec(
        attribute="anomalies_or_red_flags",
        aliases=("anomaliesOrRedFlags", "anomalies_or_red_flags", "anomalies", "redFlags"),
        default="No anomalies detected",
    ),
    FieldSpec(
        attribute="time_based_insights",
        aliases=("timeBasedInsights", "time_based_insights", "timeInsights"),
        default="No time-based insights available",
    ),
    FieldSpec(
        attribute="recommendations",
        aliases=("recommendations", "recommendation", "suggestions"),
        default="No recommendations provided",
    ),
    FieldSpec(
        attribute="risk_assessment",
        aliases=("riskAssessment", "risk_assessment", "risks"),
        default="No risk assessment available",
    ),
    FieldSpec(
        attribute="opportunities",
        aliases=("opportunities", "opportunity"),
        default="No opportunities identified",
    ),
    FieldSpec(
        attribute="future_projections",
        aliases=("futureProjections", "future_projections", "projections"),
        default="No future projections available",
    ),
    FieldSpec(
        attribute="comparative_analysis",
        aliases=("comparativeAnalysis", "comparisonAnalysis", "comparative_analysis", "comparison_analysis"),
        default="No comparative analysis available",
    ),
    FieldSpec(
        attribute="disclaimer",
        aliases=("disclaimer", "disclaimers"),
        default="This analysis is for informational purposes only and not financial advice",
    ),
)


class AnalysisRecord(BaseModel):
    """Financial analysis of the last three months of transactions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    overview: str = Field(..., alias="overview")
    spending_trends: str = Field(..., alias="spendingTrends")
    category_analysis: str = Field(..., alias="categoryAnalysis")
    anomalies_or_red_flags: str = Field(..., alias="anomaliesOrRedFlags")
    time_based_insights: str = Field(..., alias="timeBasedInsights")
    recommendations: str = Field(..., alias="recommendations")
    risk_assessment: str = Field(..., alias="riskAssessment")
    opportunities: str = Field(..., alias="opportunities")
    future_projections: str = Field(..., alias="futureProjections")
    comparative_analysis: str = Field(..., alias="comparativeAnalysis")
    disclaimer: str = Field(..., alias="disclaimer")
