"""Unit tests for the Option engine."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st
from structlog.testing import capture_logs

from asyncfp import NoSuchElementError, NotAnExceptionError, NotComputedError, Option, Try


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestOf:
    @given(st.one_of(st.integers(), st.text(), st.booleans(), st.lists(st.integers())))
    def test_non_none_value_is_returned(self, value: Any) -> None:
        assert asyncio.run(Option.of(value).get()) == value

    def test_none_raises_no_value_present(self) -> None:
        with pytest.raises(NoSuchElementError, match="No value present"):
            asyncio.run(Option.of(None).get())

    def test_falsy_values_are_present(self) -> None:
        for value in (0, "", False, []):
            assert asyncio.run(Option.of(value).get()) == value


class TestSomeAndNone:
    def test_some(self) -> None:
        assert asyncio.run(Option.some("x").get()) == "x"

    def test_none(self) -> None:
        option = Option.none()
        asyncio.run(option.run())
        assert option.is_empty() is True


class TestWhen:
    def test_true_with_value(self) -> None:
        option = Option.when(True, 123)
        assert asyncio.run(option.get()) == 123
        assert option.is_empty() is False

    def test_true_with_provider(self) -> None:
        option = Option.when(True, lambda: "test")
        assert asyncio.run(option.get()) == "test"
        assert option.is_defined() is True

    def test_async_provider(self) -> None:
        async def provide() -> str:
            return "later"

        assert asyncio.run(Option.when(True, provide).get()) == "later"

    def test_provider_is_lazy(self) -> None:
        calls: list[int] = []
        option = Option.when(True, lambda: calls.append(1) or 1)
        assert calls == []
        asyncio.run(option.run())
        assert calls == [1]

    def test_false_is_empty_and_never_calls_provider(self) -> None:
        calls: list[int] = []
        option = Option.when(False, lambda: calls.append(1) or 1)
        asyncio.run(option.run())
        assert option.is_empty() is True
        assert calls == []

    def test_provider_returning_none_is_empty(self) -> None:
        option = Option.when(True, lambda: None)
        asyncio.run(option.run())
        assert option.is_empty() is True


# ---------------------------------------------------------------------------
# Execution methods
# ---------------------------------------------------------------------------


class TestRun:
    def test_run_with_no_value(self) -> None:
        option = Option.of(None)
        assert asyncio.run(option.run()) is None
        assert option.is_empty() is True

    def test_run_with_value(self) -> None:
        option = Option.of(123)
        asyncio.run(option.run())
        assert option.is_empty() is False
        assert option.is_defined() is True


class TestIsEmpty:
    def test_after_get(self) -> None:
        option = Option.of("test")
        asyncio.run(option.get())
        assert option.is_empty() is False

    def test_after_failed_get(self) -> None:
        option = Option.of(None)
        with pytest.raises(NoSuchElementError):
            asyncio.run(option.get())
        assert option.is_empty() is True

    def test_before_execution_raises(self) -> None:
        with pytest.raises(NotComputedError, match="Option.is_empty"):
            Option.of(1).is_empty()
        with pytest.raises(NotComputedError):
            Option.of(1).is_defined()


class TestGetOrElse:
    def test_value(self) -> None:
        assert asyncio.run(Option.of(None).get_or_else("test")) == "test"

    def test_provider(self) -> None:
        async def provide() -> str:
            return "test"

        assert asyncio.run(Option.of(None).get_or_else(provide)) == "test"

    def test_present_value_wins(self) -> None:
        assert asyncio.run(Option.of(1).get_or_else(2)) == 1

    def test_provider_not_called_when_present(self) -> None:
        calls: list[int] = []
        asyncio.run(Option.of(1).get_or_else(lambda: calls.append(1)))
        assert calls == []


class TestGetOrElseRaise:
    def test_raises_on_empty(self) -> None:
        with pytest.raises(RuntimeError, match="Throwing"):
            asyncio.run(Option.of(None).get_or_else_raise(lambda: RuntimeError("Throwing")))

    def test_returns_value(self) -> None:
        assert asyncio.run(Option.of(123).get_or_else_raise(lambda: RuntimeError("Throwing"))) == 123

    def test_non_exception_is_wrapped(self) -> None:
        with pytest.raises(NotAnExceptionError, match="got str: 'missing'"):
            asyncio.run(Option.none().get_or_else_raise(lambda: "missing"))


class TestMemoization:
    def test_chain_runs_once(self) -> None:
        calls = 0

        def count(v: int) -> int:
            nonlocal calls
            calls += 1
            return v + 1

        option = Option.of(1).map(count)
        assert asyncio.run(option.get()) == 2
        assert asyncio.run(option.get_or_else(0)) == 2
        asyncio.run(option.run())
        assert calls == 1

    def test_concurrent_callers_run_the_chain_once(self) -> None:
        calls = 0

        async def slow(v: int) -> int:
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return v

        option = Option.of(7).map(slow)

        async def go() -> list[int]:
            return await asyncio.gather(option.get(), option.get())

        assert asyncio.run(go()) == [7, 7]
        assert calls == 1

    def test_escaping_error_is_not_cached(self) -> None:
        attempts = 0

        def flaky(v: int) -> int:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                raise RuntimeError("first attempt")
            return v

        option = Option.of(5).map(flaky)
        with pytest.raises(RuntimeError, match="first attempt"):
            asyncio.run(option.get())
        assert option.is_computed is False
        assert asyncio.run(option.get()) == 5

    def test_completion_is_logged(self) -> None:
        with capture_logs() as logs:
            asyncio.run(Option.of(None).run())
        assert {
            "event": "asyncfp.chain.completed",
            "kind": "Option",
            "steps": 1,
            "empty": True,
            "log_level": "debug",
        } in logs

    def test_repr(self) -> None:
        some, nothing = Option.of(1), Option.none()
        assert repr(some) == "Option(<pending>)"
        asyncio.run(some.run())
        asyncio.run(nothing.run())
        assert repr(some) == "Some(1)"
        assert repr(nothing) == "Nothing"


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


class TestFilter:
    def test_keeps_matching_value(self) -> None:
        assert asyncio.run(Option.of(4).filter(lambda v: v % 2 == 0).get()) == 4

    def test_empties_non_matching_value(self) -> None:
        option = Option.of(3).filter(lambda v: v % 2 == 0)
        asyncio.run(option.run())
        assert option.is_empty() is True

    def test_skips_predicate_on_empty(self) -> None:
        calls: list[Any] = []
        asyncio.run(Option.none().filter(lambda v: calls.append(v) or True).run())
        assert calls == []

    def test_predicate_error_propagates(self) -> None:
        def boom(_: int) -> bool:
            raise ValueError("predicate")

        with pytest.raises(ValueError, match="predicate"):
            asyncio.run(Option.of(1).filter(boom).run())


class TestMap:
    def test_maps_value(self) -> None:
        assert asyncio.run(Option.of(2).map(lambda v: v * 3).get()) == 6

    def test_async_mapper(self) -> None:
        async def triple(v: int) -> int:
            return v * 3

        assert asyncio.run(Option.of(2).map(triple).get()) == 6

    def test_mapping_to_none_empties(self) -> None:
        option = Option.of(2).map(lambda _: None)
        assert asyncio.run(option.get_or_else("empty")) == "empty"

    def test_skips_empty(self) -> None:
        calls: list[Any] = []
        asyncio.run(Option.none().map(calls.append).run())
        assert calls == []


class TestMapTry:
    def test_returns_a_try(self) -> None:
        t = Option.of(2).map_try(lambda v: v * 2)
        assert isinstance(t, Try)
        assert asyncio.run(t.get()) == 4

    def test_empty_option_fails_the_try(self) -> None:
        t = Option.of(None).map_try(lambda v: v)
        with pytest.raises(NoSuchElementError, match="No value present"):
            asyncio.run(t.get())
        assert t.is_failure() is True

    def test_mapper_error_is_captured(self) -> None:
        def boom(_: int) -> int:
            raise ValueError("mapper")

        t = Option.of(1).map_try(boom)
        assert asyncio.run(t.get_or_else(-1)) == -1
        assert isinstance(t.get_cause(), ValueError)


class TestFlatMap:
    def test_adopts_nested_value(self) -> None:
        assert asyncio.run(Option.of(2).flat_map(lambda v: Option.of(v + 1)).get()) == 3

    def test_nested_empty_empties(self) -> None:
        option = Option.of(2).flat_map(lambda _: Option.none())
        asyncio.run(option.run())
        assert option.is_empty() is True

    def test_async_provider(self) -> None:
        async def nested(v: int) -> Option[int]:
            return Option.of(v * 10)

        assert asyncio.run(Option.of(2).flat_map(nested).get()) == 20

    def test_skips_empty(self) -> None:
        calls: list[Any] = []
        asyncio.run(Option.none().flat_map(lambda v: calls.append(v) or Option.of(1)).run())
        assert calls == []


class TestOrElse:
    def test_with_option(self) -> None:
        assert asyncio.run(Option.of(None).or_else(Option.of("test")).get()) == "test"

    def test_with_provider(self) -> None:
        assert asyncio.run(Option.of(None).or_else(lambda: Option.of("test")).get()) == "test"

    def test_with_async_provider(self) -> None:
        async def provide() -> Option[str]:
            return Option.of("async")

        assert asyncio.run(Option.none().or_else(provide).get()) == "async"

    def test_present_value_wins_and_provider_is_not_called(self) -> None:
        calls: list[int] = []
        option = Option.of("mine").or_else(lambda: calls.append(1) or Option.of("other"))
        assert asyncio.run(option.get()) == "mine"
        assert calls == []

    def test_empty_alternative_stays_empty(self) -> None:
        option = Option.none().or_else(Option.none())
        asyncio.run(option.run())
        assert option.is_empty() is True


class TestOnEmptyAndPeek:
    def test_on_empty_runs_when_empty(self) -> None:
        ran: list[bool] = []
        option = Option.when(False, 123).on_empty(lambda: ran.append(True))
        with pytest.raises(NoSuchElementError):
            asyncio.run(option.get())
        assert ran == [True]

    def test_on_empty_skipped_when_present(self) -> None:
        ran: list[bool] = []
        assert asyncio.run(Option.of(1).on_empty(lambda: ran.append(True)).get()) == 1
        assert ran == []

    def test_peek_sees_value(self) -> None:
        seen: list[int] = []
        option = Option.of(2).peek(seen.append).map(lambda v: v * 2)
        assert asyncio.run(option.get()) == 4
        assert seen == [2]

    def test_peek_skipped_when_empty(self) -> None:
        seen: list[Any] = []
        asyncio.run(Option.none().peek(seen.append).run())
        assert seen == []

    def test_async_side_effects(self) -> None:
        seen: list[str] = []

        async def record_empty() -> None:
            seen.append("empty")

        async def record(v: int) -> None:
            seen.append(f"value {v}")

        asyncio.run(Option.none().on_empty(record_empty).run())
        asyncio.run(Option.of(1).peek(record).run())
        assert seen == ["empty", "value 1"]


class TestFoldAndTransform:
    def test_fold_present(self) -> None:
        assert asyncio.run(Option.of(2).fold("none", lambda v: f"got {v}")) == "got 2"

    def test_fold_empty(self) -> None:
        assert asyncio.run(Option.none().fold("none", lambda v: f"got {v}")) == "none"

    def test_fold_empty_with_provider(self) -> None:
        assert asyncio.run(Option.none().fold(lambda: "lazy", lambda v: v)) == "lazy"

    def test_transform_receives_the_option(self) -> None:
        option = Option.of(1)
        assert option.transform(lambda o: o) is option

    def test_transform_runs_immediately(self) -> None:
        length = Option.of("abc").transform(lambda o: o.map(len))
        assert isinstance(length, Option)
        assert asyncio.run(length.get()) == 3
