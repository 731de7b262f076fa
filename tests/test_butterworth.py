from __future__ import annotations

import logging
import math

import numpy as np
import pytest
from scipy.signal import lfilter, lfiltic

from rtfilter import (
    REFERENCE_SPEC,
    ButterworthFilter,
    FilterSpec,
    NotVerifiedError,
    RateMismatchError,
)

A = [1.0, -1.561018075800718, 0.641351538057563]
B = [0.020083365564211, 0.040166731128423, 0.020083365564211]


def _verified(spec: FilterSpec | None = None) -> ButterworthFilter:
    filt = ButterworthFilter(spec)
    filt.verify_rate(filt.spec.expected_interval_s)
    return filt


def test_default_filter_uses_reference_design() -> None:
    filt = ButterworthFilter()
    assert filt.order == 2
    assert filt.sample_rate_hz == 100.0
    assert filt.group_delay_samples == 5
    assert filt.group_delay_s == pytest.approx(0.05)
    assert filt.spec.a == tuple(A)
    assert filt.spec.b == tuple(B)
    assert not filt.is_verified


def test_reference_scenario_step_response() -> None:
    filt = ButterworthFilter(
        FilterSpec(order=2, sample_rate_hz=100.0, a=A, b=B, group_delay_samples=5)
    )
    filt.verify_rate(0.01)

    y1, ready1 = filt.process(1.0)
    y2, ready2 = filt.process(1.0)
    assert not ready1 and not ready2
    assert math.isnan(y1) and math.isnan(y2)

    # prior inputs are real, prior outputs are zero placeholders
    y3, ready3 = filt.process(1.0)
    assert ready3
    assert y3 == pytest.approx(sum(B), abs=1e-15)
    assert y3 == pytest.approx(0.080333462256845)

    outputs = [filt.process(1.0).value for _ in range(60)]
    assert abs(outputs[-1] - 1.0) < 1e-3
    assert abs(outputs[-1] - 1.0) < abs(outputs[0] - 1.0)


def test_constant_input_converges_to_dc_gain() -> None:
    filt = _verified()
    c = 3.7
    y = math.nan
    for _ in range(500):
        y, _ready = filt.process(c)
    assert y == pytest.approx(c * REFERENCE_SPEC.dc_gain, rel=1e-9)
    assert REFERENCE_SPEC.dc_gain == pytest.approx(1.0, abs=1e-9)


@pytest.mark.parametrize("order", [1, 2, 4])
def test_ready_false_for_exactly_order_calls(order: int) -> None:
    spec = FilterSpec(
        order=order,
        sample_rate_hz=50.0,
        a=[1.0] + [0.0] * order,
        b=[1.0 / (order + 1)] * (order + 1),
    )
    filt = _verified(spec)
    rng = np.random.default_rng(order)
    flags = [filt.process(float(v)).ready for v in rng.normal(size=20)]
    assert flags == [False] * order + [True] * (20 - order)


def test_histories_stay_at_order_length() -> None:
    filt = _verified()
    filt.process(1.0)
    assert len(filt.input_history) == len(filt.output_history) == 1
    for n in range(2, 40):
        filt.process(float(n))
        assert len(filt.input_history) == len(filt.output_history) == 2
    assert filt.input_history == (39.0, 38.0)
    assert filt.samples_seen == 39


def test_warm_up_records_zero_outputs() -> None:
    filt = _verified()
    filt.process(5.0)
    filt.process(6.0)
    assert filt.input_history == (6.0, 5.0)
    assert filt.output_history == (0.0, 0.0)
    assert filt.is_ready


def test_first_order_recursion_by_hand() -> None:
    spec = FilterSpec(order=1, sample_rate_hz=10.0, a=[1.0, -0.5], b=[0.25, 0.25])
    filt = _verified(spec)
    assert filt.process(2.0).ready is False
    assert filt.process(4.0).value == pytest.approx(1.5)
    assert filt.process(6.0).value == pytest.approx(3.25)


def test_matches_scipy_lfilter_after_warm_up() -> None:
    rng = np.random.default_rng(0)
    x = rng.normal(size=300)
    filt = _verified()

    got = np.array([filt.process(float(v)).value for v in x])

    order = REFERENCE_SPEC.order
    zi = lfiltic(B, A, y=np.zeros(order), x=x[order - 1 :: -1])
    expected, _ = lfilter(B, A, x[order:], zi=zi)
    assert np.all(np.isnan(got[:order]))
    np.testing.assert_allclose(got[order:], expected, rtol=1e-10, atol=1e-12)


def test_process_before_verification_raises_without_state_change() -> None:
    filt = ButterworthFilter()
    with pytest.raises(NotVerifiedError, match="not verified"):
        filt.process(1.0)
    assert filt.samples_seen == 0
    assert filt.input_history == ()
    assert filt.output_history == ()

    filt.verify_rate(0.01)
    results = [filt.process(1.0) for _ in range(3)]
    assert [r.ready for r in results] == [False, False, True]
    assert results[2].value == pytest.approx(sum(B))


@pytest.mark.parametrize("dt", [0.01, 0.0052, 0.0148])
def test_verify_rate_accepts_intervals_within_tolerance(dt: float) -> None:
    filt = ButterworthFilter()
    filt.verify_rate(dt)
    assert filt.is_verified


@pytest.mark.parametrize("dt", [0.03, 0.005, 0.0151, 0.0, -0.01, math.nan, math.inf])
def test_verify_rate_rejects_intervals_outside_tolerance(dt: float) -> None:
    filt = ButterworthFilter()
    with pytest.raises(RateMismatchError) as excinfo:
        filt.verify_rate(dt)
    assert not filt.is_verified
    assert excinfo.value.expected_interval == pytest.approx(0.01)
    if not math.isnan(dt):
        assert excinfo.value.actual_interval == dt


def test_rate_mismatch_message_reports_both_intervals() -> None:
    filt = ButterworthFilter()
    with pytest.raises(RateMismatchError) as excinfo:
        filt.verify_rate(0.03)
    assert str(excinfo.value) == (
        "Sample rate does not match! desired interval[0.010000] input interval[0.030000]"
    )


def test_failed_verification_keeps_earlier_success() -> None:
    filt = ButterworthFilter()
    filt.verify_rate(0.01)
    with pytest.raises(RateMismatchError):
        filt.verify_rate(0.03)
    assert filt.is_verified
    filt.verify_rate(0.011)
    assert filt.process(1.0).ready is False


def test_rejected_rate_mid_stream_leaves_history_untouched() -> None:
    filt = _verified()
    twin = _verified()
    samples = [0.5, -1.0, 2.0, 0.25, 1.5]  # order + 3
    for v in samples:
        filt.process(v)
        twin.process(v)

    inputs = filt.input_history
    outputs = filt.output_history
    seen = filt.samples_seen

    with pytest.raises(RateMismatchError):
        filt.verify_rate(0.03)

    assert filt.input_history == inputs
    assert filt.output_history == outputs
    assert filt.samples_seen == seen
    assert filt.process(0.75) == twin.process(0.75)


def test_nan_input_propagates() -> None:
    filt = _verified()
    for _ in range(10):
        filt.process(1.0)
    y, ready = filt.process(math.nan)
    assert ready and math.isnan(y)
    y, ready = filt.process(1.0)
    assert ready and math.isnan(y)


def test_unstable_coefficients_are_not_refused() -> None:
    spec = FilterSpec(order=1, sample_rate_hz=10.0, a=[1.0, -1.5], b=[1.0, 0.0])
    assert not spec.is_stable
    filt = _verified(spec)
    values = [filt.process(1.0).value for _ in range(20)]
    assert values[-1] > values[-2] > values[1]


def test_reset_restarts_warm_up_and_keeps_verification() -> None:
    filt = _verified()
    for _ in range(5):
        filt.process(2.0)
    filt.reset()
    assert filt.is_verified
    assert filt.samples_seen == 0
    assert filt.input_history == ()
    assert not filt.is_ready
    assert [filt.process(1.0).ready for _ in range(3)] == [False, False, True]


def test_verify_rate_logging(caplog: pytest.LogCaptureFixture) -> None:
    filt = ButterworthFilter()
    with caplog.at_level(logging.INFO, logger="rtfilter"):
        filt.verify_rate(0.01)
        with pytest.raises(RateMismatchError):
            filt.verify_rate(0.5)
    levels = [record.levelno for record in caplog.records]
    assert logging.INFO in levels
    assert logging.WARNING in levels
