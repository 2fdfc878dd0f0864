"""Tests for raise primitives: must, must1..must4, fail, failf."""

import math

import pytest
from hypothesis import given

from bailout import Failure, NilCauseError, Slot, fail, failf, handle, is_caused_by, must, must1, must2, must3, must4
from tests.strategies import causes, messages, values


def atoi(text: str) -> tuple[int, Exception | None]:
    try:
        return int(text), None
    except ValueError as e:
        return 0, e


def divmod_checked(a: float, b: float) -> tuple[float, float, Exception | None]:
    rem = math.fmod(a, b) if b else math.nan
    quo = (a - rem) / b if b else math.nan
    if math.isnan(quo) or math.isnan(rem):
        return quo, rem, Exception(f'cannot divmod({a}, {b})')
    return quo, rem, None


def muldivmod(a: float, b: float) -> tuple[float, float, float, Exception | None]:
    quo, rem, err = divmod_checked(a, b)
    if err is not None:
        return a * b, quo, rem, Exception(f'cannot muldivmod({a}, {b})')
    return a * b, quo, rem, None


def analyze_trades(*prices: float) -> tuple[float, float, float, float, Exception | None]:
    if not prices:
        return 0, 0, 0, 0, Exception('cannot analyze empty input')
    return prices[0], max(prices), min(prices), prices[-1], None


class TestMust:
    """Tests for must (arity 0)."""

    def test_none_is_noop(self):
        assert must(None) is None

    def test_cause_raises_failure(self, oops):
        with pytest.raises(Failure) as info:
            must(oops)
        assert info.value.cause is oops

    def test_inside_handle(self):
        out = Slot()
        with handle(out):
            must(None)
        assert out.error is None

        with handle(out):
            must(Exception('oops'))
        assert str(out.error) == 'oops'

    @given(causes)
    def test_any_cause_raises_exactly_that_cause(self, cause):
        with pytest.raises(Failure) as info:
            must(cause)
        assert info.value.cause is cause


class TestMust1:
    """Tests for must1."""

    def test_returns_value(self):
        assert must1(*atoi('42')) == 42

    def test_raises_on_error(self):
        with pytest.raises(Failure, match='forty-two') as info:
            must1(*atoi('forty-two'))
        assert isinstance(info.value.cause, ValueError)

    @given(values)
    def test_identity_when_no_cause(self, value):
        assert must1(value, None) is value

    @given(values, causes)
    def test_value_discarded_on_cause(self, value, cause):
        with pytest.raises(Failure) as info:
            must1(value, cause)
        assert info.value.cause is cause


class TestMust2:
    """Tests for must2."""

    def test_returns_values(self):
        quo, rem = must2(*divmod_checked(42, 56))
        assert quo == 0
        assert rem == 42

    def test_raises_on_error(self):
        out = Slot()
        with handle(out):
            must2(*divmod_checked(0, 0))
        assert str(out.error) == 'cannot divmod(0, 0)'

    @given(values, values)
    def test_identity_when_no_cause(self, a, b):
        assert must2(a, b, None) == (a, b)


class TestMust3:
    """Tests for must3."""

    def test_returns_values(self):
        assert must3(*muldivmod(42, 56)) == (2352, 0, 42)

    def test_raises_on_error(self):
        out = Slot()
        with handle(out):
            must3(*muldivmod(0, 0))
        assert str(out.error) == 'cannot muldivmod(0, 0)'

    @given(values, values, values, causes)
    def test_cause_raises(self, a, b, c, cause):
        with pytest.raises(Failure) as info:
            must3(a, b, c, cause)
        assert info.value.cause is cause


class TestMust4:
    """Tests for must4."""

    def test_returns_values(self):
        assert must4(*analyze_trades(3, 1, 4)) == (3, 4, 1, 4)

    def test_raises_on_error(self):
        out = Slot()
        with handle(out):
            must4(*analyze_trades())
        assert str(out.error) == 'cannot analyze empty input'

    @given(values, values, values, values)
    def test_identity_when_no_cause(self, a, b, c, d):
        assert must4(a, b, c, d, None) == (a, b, c, d)


class TestFail:
    """Tests for fail."""

    def test_fail_none_raises_sentinel(self):
        with pytest.raises(NilCauseError, match=r'called fail\(None\)'):
            fail(None)

    def test_fail_none_is_not_intercepted(self):
        out = Slot()
        with pytest.raises(NilCauseError), handle(out):
            fail(None)
        assert out.error is None

    def test_fail_raises_failure(self, oops):
        with pytest.raises(Failure, match='oops') as info:
            fail(oops)
        assert info.value.cause is oops

    @given(causes)
    def test_fail_distinguishes_real_causes(self, cause):
        with pytest.raises(Failure) as info:
            fail(cause)
        assert not isinstance(info.value, NilCauseError)
        assert info.value.cause is cause


class TestFailf:
    """Tests for failf."""

    def test_formats_message(self):
        with pytest.raises(Failure) as info:
            failf('> 1 result: {!r}', 'ACME')
        assert str(info.value.cause) == "> 1 result: 'ACME'"

    def test_keyword_arguments(self):
        with pytest.raises(Failure, match='no result: ACME'):
            failf('no result: {sym}', sym='ACME')

    def test_exception_argument_is_chained(self, oops):
        with pytest.raises(Failure) as info:
            failf('loading prices: {}', oops)
        assert info.value.cause.__cause__ is oops
        assert is_caused_by(info.value, oops)

    def test_plain_arguments_not_chained(self):
        with pytest.raises(Failure) as info:
            failf('{} + {}', 1, 2)
        assert info.value.cause.__cause__ is None

    @given(messages)
    def test_always_raises(self, message):
        with pytest.raises(Failure) as info:
            failf('{}', message)
        assert str(info.value) == message
