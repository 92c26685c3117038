"""Tests for the quarterly analysis service."""
import json
from datetime import datetime
import pytest
from budgetai.adapters.mock import MockTextSource, candidate_chunk
from budgetai.errors import AnalysisDecodeError, NoJsonObjectError, UpstreamError
from budgetai.models.transaction import Transaction
from budgetai.services.analysis import AnalysisService


@pytest.fixture
def transactions():
    return [
        Transaction(transaction_date=datetime(2024, 2, 10), payee="Landlord", amount=-900.0, categories=["Rent"]),
        Transaction(transaction_date=datetime(2024, 2, 12), payee="Tesco", amount=-80.5, categories=["Groceries"]),
        Transaction(transaction_date=datetime(2024, 2, 28), payee="Employer", amount=2500.0, categories=["Salary"]),
    ]


def _body(text):
    return json.dumps(candidate_chunk(text))


@pytest.mark.asyncio
async def test_default_mock_response_is_fully_populated(transactions):
    source = MockTextSource()
    record = await AnalysisService(source).analyze_last_three_months(transactions)

    assert record.overview == MockTextSource.DEFAULT_ANALYSIS["overview"]
    assert record.comparative_analysis == MockTextSource.DEFAULT_ANALYSIS["comparisonAnalysis"]
    assert source.call_count == 1
    prompt = source.payloads[0]["contents"][0]["parts"][0]["text"]
    assert "Required JSON Response Structure" in prompt


@pytest.mark.asyncio
async def test_partial_response_falls_back_to_defaults(transactions):
    source = MockTextSource(body=_body('Document: ```json\n{"overview":"ok","disclaimer":"d"}\n```'))
    record = await AnalysisService(source).analyze_last_three_months(transactions)
    assert record.overview == "ok"
    assert record.disclaimer == "d"
    assert record.spending_trends == "No spending trends identified"
    assert record.comparative_analysis == "No comparative analysis available"


@pytest.mark.asyncio
async def test_no_transactions_is_rejected():
    source = MockTextSource()
    with pytest.raises(ValueError):
        await AnalysisService(source).analyze_last_three_months([])
    assert source.call_count == 0


@pytest.mark.asyncio
async def test_prose_only_response(transactions):
    source = MockTextSource(body=_body("I cannot analyse this data."))
    with pytest.raises(NoJsonObjectError):
        await AnalysisService(source).analyze_last_three_months(transactions)


@pytest.mark.asyncio
async def test_malformed_object_reports_raw_text(transactions):
    raw = '{"overview": "unterminated, "spendingTrends": }'
    source = MockTextSource(body=_body(raw))
    with pytest.raises(AnalysisDecodeError) as exc_info:
        await AnalysisService(source).analyze_last_three_months(transactions)
    assert exc_info.value.raw_content == raw


@pytest.mark.asyncio
async def test_upstream_error_envelope(transactions):
    source = MockTextSource(body='{"error": {"message": "API key not valid"}}')
    with pytest.raises(UpstreamError):
        await AnalysisService(source).analyze_last_three_months(transactions)


@pytest.mark.asyncio
async def test_retry_gives_same_record(transactions):
    service = AnalysisService(MockTextSource())
    first = await service.analyze_last_three_months(transactions)
    second = await service.analyze_last_three_months(transactions)
    assert first == second
