"""Tests for wrap() and stack capture."""

import msgspec
import pytest

import bailout
from bailout import Frame, Slot, StackError, fail, handle, must1, wrap
from bailout.stack import capture_stack

OOPS = ValueError('oops')


def run_wrapped(skip: int):
    out = Slot()
    with wrap(out, skip):

        def crash():
            fail(OOPS)

        crash()
    return out.error


class TestWrap:
    """Tests for the stack-capturing boundary."""

    def test_error_keeps_cause(self):
        err = run_wrapped(1)
        assert isinstance(err, StackError)
        assert str(err) == 'oops'
        assert err.unwrap() is OOPS
        assert err.__cause__ is OOPS

    def test_skip_one_starts_at_caller(self):
        err = run_wrapped(1)
        frame = err.stack_frames()[0]
        assert frame.line == 'crash()'
        assert frame.name == 'run_wrapped'

    def test_skip_zero_starts_at_raise_site(self):
        err = run_wrapped(0)
        frame = err.stack_frames()[0]
        assert frame.name == 'crash'
        assert frame.line == 'fail(OOPS)'

    def test_outer_frames_included(self):
        err = run_wrapped(0)
        names = [f.name for f in err.stack_frames()]
        assert names[:3] == ['crash', 'run_wrapped', 'test_outer_frames_included']

    def test_library_frames_excluded(self):
        err = run_wrapped(0)
        names = [f.name for f in err.stack_frames()]
        assert 'fail' not in names
        assert '__exit__' not in names

    def test_no_failure_leaves_slot_untouched(self):
        out = Slot()
        with wrap(out, 1):
            must1(1, None)
        assert out.error is None

    def test_transforms_applied_before_decoration(self):
        out = Slot()
        with wrap(out, 0, lambda e: KeyError(str(e))):
            fail(OOPS)
        assert isinstance(out.error, StackError)
        assert isinstance(out.error.unwrap(), KeyError)

    def test_suppression_skips_capture(self):
        out = Slot()
        with wrap(out, 0, lambda e: None):
            fail(OOPS)
        assert out.error is None

    def test_without_slot_reraises_plain_failure(self):
        with pytest.raises(bailout.Failure) as info, wrap(None, 0):
            fail(OOPS)
        assert info.value.cause is OOPS

    def test_foreign_exception_untouched(self):
        out = Slot()
        with pytest.raises(ZeroDivisionError), wrap(out, 0):
            1 / 0  # noqa: B018
        assert out.error is None

    def test_negative_skip_rejected(self):
        with pytest.raises(ValueError, match='skip'):
            wrap(Slot(), -1)

    def test_stack_limit_from_config(self):
        bailout.init(stack_limit=2)
        try:
            err = run_wrapped(0)
        finally:
            from bailout import _config

            _config.reset()
        assert len(err.stack_frames()) == 2

    def test_skip_past_stack_yields_no_frames(self):
        err = run_wrapped(10_000)
        assert err.stack_frames() == ()


class TestStackError:
    """Tests for StackError rendering and encoding."""

    def test_error_stack_rendering(self):
        err = run_wrapped(1)
        text = err.error_stack()
        assert text.startswith('ValueError: oops\n')
        assert 'in run_wrapped' in text
        assert 'crash()' in text

    def test_to_dict_is_encodable(self):
        err = run_wrapped(1)
        data = msgspec.json.decode(err.to_json())
        assert data['type'] == 'ValueError'
        assert data['error'] == 'oops'
        assert data['frames'][0]['name'] == 'run_wrapped'
        assert data['frames'][0]['line'] == 'crash()'

    def test_frame_struct(self):
        frame = Frame(filename='app.py', lineno=3, name='main', line='run()')
        assert str(frame) == '  File "app.py", line 3, in main\n    run()'
        assert msgspec.json.decode(msgspec.json.encode(frame), type=Frame) == frame

    def test_frame_without_source(self):
        assert str(Frame('app.py', 3, 'main')) == '  File "app.py", line 3, in main'


class TestCaptureStack:
    """Tests for capture_stack directly."""

    def test_none_traceback(self):
        assert capture_stack(None) == ()

    def test_capture_from_plain_exception(self):
        def inner():
            raise RuntimeError('x')

        try:
            inner()
        except RuntimeError as exc:
            frames = capture_stack(exc.__traceback__)
        assert frames[0].name == 'inner'
        assert frames[1].name == 'test_capture_from_plain_exception'

    def test_limit(self):
        try:
            raise RuntimeError('x')
        except RuntimeError as exc:
            frames = capture_stack(exc.__traceback__, limit=1)
        assert len(frames) == 1


class TestHandleDoesNotCapture:
    """handle() deposits the bare cause."""

    def test_plain_cause(self):
        out = Slot()
        with handle(out):
            fail(OOPS)
        assert out.error is OOPS
