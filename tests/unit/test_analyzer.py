"""Unit tests for the per-loan prediction -> strategy pipeline"""

import asyncio
import httpx

from loan_recovery.dashboard.analyzer import LoanAnalyzer
from loan_recovery.dashboard.status import StatusSlot
from loan_recovery.domain.models import AnalysisPhase, AnalyzerState, PredictionResult, StrategyResult


def make_analyzer(fake_service, loan_id: str = "l1") -> LoanAnalyzer:
    return LoanAnalyzer(loan_id, fake_service.client(), StatusSlot())


async def test_analyze_both_steps_succeed(fake_service):
    analyzer = make_analyzer(fake_service)
    analyzer.status.set_message("Model trained on 120 samples")

    state = await analyzer.analyze()

    assert state == AnalyzerState(
        phase=AnalysisPhase.DONE,
        loading=False,
        prediction=PredictionResult(probability_default=0.42, label="risky"),
        strategy=StrategyResult(
            recommended_strategy="payment-plan",
            risk_level="medium",
            actions=("Contact borrower", "Offer plan"),
        ),
    )
    # Successful steps leave the message alone
    assert analyzer.status.message == "Model trained on 120 samples"


async def test_predict_settles_before_strategy_starts(fake_service):
    await make_analyzer(fake_service).analyze()

    assert fake_service.events == [
        ("start", "/predict/l1"),
        ("end", "/predict/l1"),
        ("start", "/strategy/l1"),
        ("end", "/strategy/l1"),
    ]


async def test_strategy_runs_after_failed_prediction(fake_service):
    fake_service.on("GET", "/predict/l1", httpx.ConnectError("Connection refused"))

    await make_analyzer(fake_service).analyze()

    assert fake_service.paths() == ["/predict/l1", "/strategy/l1"]
    assert fake_service.events[1] == ("end", "/predict/l1")


async def test_prediction_failure_strategy_success(fake_service):
    fake_service.json("GET", "/predict/l1", {"detail": "Model not trained"}, status_code=400)
    analyzer = make_analyzer(fake_service)

    state = await analyzer.analyze()

    assert state.prediction is None
    assert state.strategy is not None
    assert state.strategy.recommended_strategy == "payment-plan"
    assert analyzer.status.message == "Error: Model not trained"


async def test_prediction_success_strategy_failure(fake_service):
    fake_service.on("GET", "/strategy/l1", httpx.Response(500))
    analyzer = make_analyzer(fake_service)

    state = await analyzer.analyze()

    assert state.prediction == PredictionResult(probability_default=0.42, label="risky")
    assert state.strategy is None
    assert analyzer.status.message == "Error: Strategy failed"


async def test_both_steps_fail_last_error_wins(fake_service):
    fake_service.on("GET", "/predict/l1", httpx.Response(500))
    fake_service.on("GET", "/strategy/l1", httpx.Response(200, text="garbled"))
    analyzer = make_analyzer(fake_service)

    state = await analyzer.analyze()

    assert state.prediction is None
    assert state.strategy is None
    assert state.phase is AnalysisPhase.DONE
    assert state.loading is False
    assert analyzer.status.message == "Error: Strategy failed"


async def test_loading_true_while_running(fake_service, sample_strategy):
    analyzer = make_analyzer(fake_service)
    observed = []

    def strategy_route(request):
        observed.append(analyzer.state)
        return httpx.Response(200, json=sample_strategy)

    fake_service.on("GET", "/strategy/l1", strategy_route)
    await analyzer.analyze()

    during = observed[0]
    assert during.phase is AnalysisPhase.RUNNING
    assert during.loading is True
    # Prediction is visible before strategy is requested
    assert during.prediction is not None
    assert analyzer.state.loading is False


async def test_rerun_failure_clears_previous_result(fake_service):
    analyzer = make_analyzer(fake_service)
    await analyzer.analyze()

    fake_service.on("GET", "/predict/l1", httpx.Response(503))
    state = await analyzer.analyze()

    assert state.prediction is None
    assert state.strategy is not None


async def test_previous_state_object_is_never_mutated(fake_service):
    analyzer = make_analyzer(fake_service)
    initial = analyzer.state

    await analyzer.analyze()

    assert initial == AnalyzerState()
    assert analyzer.state is not initial


async def test_analyzers_do_not_share_state(fake_service):
    status = StatusSlot()
    client = fake_service.client()
    first = LoanAnalyzer("l1", client, status)
    second = LoanAnalyzer("l2", client, status)

    await asyncio.gather(first.analyze(), second.analyze())

    assert first.state.prediction is not None
    assert second.state.prediction is None
    assert second.state.strategy is None
    # l2 is unknown to the service; its error lands in the shared slot
    assert status.message == "Error: Not Found"
