"""
InMemoryStore 단위 테스트

이 모듈은 메모리 저장소의 조건부 SET, 만료, FIFO 큐 동작을 테스트합니다.
"""

import asyncio
import pytest
from hypothesis import given, strategies as st

from kvq.adapters.storage.memory_store import InMemoryStore, WRONGTYPE
from kvq.core.models import Condition, SetCommand
from kvq.ports.kvstore import StoreOperationError


def _cmd(key="k", value="v", expiry=0, condition=Condition.NONE):
    return SetCommand(key=key, value=value, expiry=expiry, condition=condition)


class TestInMemorySet:
    """SET/GET 테스트"""

    @pytest.mark.asyncio
    async def test_set_then_get(self, memory_store):
        assert await memory_store.set(_cmd(value="hello")) is True
        assert await memory_store.get("k") == b"hello"

    @pytest.mark.asyncio
    async def test_get_missing(self, memory_store):
        assert await memory_store.get("missing") is None

    @pytest.mark.asyncio
    async def test_nx_does_not_overwrite(self, memory_store):
        await memory_store.set(_cmd(value="first"))

        assert await memory_store.set(_cmd(value="second", condition=Condition.NX)) is False
        assert await memory_store.get("k") == b"first"

    @pytest.mark.asyncio
    async def test_nx_on_missing_key(self, memory_store):
        assert await memory_store.set(_cmd(condition=Condition.NX)) is True
        assert await memory_store.get("k") == b"v"

    @pytest.mark.asyncio
    async def test_xx_on_missing_key_is_noop(self, memory_store):
        assert await memory_store.set(_cmd(condition=Condition.XX)) is False
        assert await memory_store.get("k") is None

    @pytest.mark.asyncio
    async def test_xx_overwrites_existing(self, memory_store):
        await memory_store.set(_cmd(value="first"))

        assert await memory_store.set(_cmd(value="second", condition=Condition.XX)) is True
        assert await memory_store.get("k") == b"second"

    @pytest.mark.asyncio
    async def test_expiry_in_seconds(self, memory_store, fake_clock):
        await memory_store.set(_cmd(expiry=10))

        fake_clock.advance(9.5)
        assert await memory_store.get("k") == b"v"

        fake_clock.advance(0.5)
        assert await memory_store.get("k") is None

    @pytest.mark.asyncio
    async def test_zero_expiry_never_expires(self, memory_store, fake_clock):
        await memory_store.set(_cmd(expiry=0))

        fake_clock.advance(10 ** 9)
        assert await memory_store.get("k") == b"v"

    @pytest.mark.asyncio
    async def test_expired_key_allows_nx(self, memory_store, fake_clock):
        await memory_store.set(_cmd(value="old", expiry=1))
        fake_clock.advance(2)

        assert await memory_store.set(_cmd(value="new", condition=Condition.NX)) is True
        assert await memory_store.get("k") == b"new"

    @pytest.mark.asyncio
    async def test_set_replaces_list(self, memory_store):
        await memory_store.push("k", "a b")
        await memory_store.set(_cmd(value="plain"))

        assert await memory_store.get("k") == b"plain"

    @pytest.mark.asyncio
    async def test_get_on_list_is_wrongtype(self, memory_store):
        await memory_store.push("q", "a")

        with pytest.raises(StoreOperationError, match="WRONGTYPE"):
            await memory_store.get("q")


class TestInMemoryQueue:
    """큐 테스트"""

    @pytest.mark.asyncio
    async def test_fifo_order(self, memory_store):
        assert await memory_store.push("q", "a b c") == 3

        assert await memory_store.pop("q") == "a"
        assert await memory_store.pop("q") == "b"
        assert await memory_store.pop("q") == "c"
        assert await memory_store.pop("q") is None

    @pytest.mark.asyncio
    async def test_push_appends_across_calls(self, memory_store):
        await memory_store.push("q", "a b")
        assert await memory_store.push("q", "c") == 3

        assert [await memory_store.pop("q") for _ in range(3)] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_push_nothing(self, memory_store):
        assert await memory_store.push("q", "   ") == 0
        assert await memory_store.pop("q") is None

    @pytest.mark.asyncio
    async def test_pop_missing(self, memory_store):
        assert await memory_store.pop("nothing") is None

    @pytest.mark.asyncio
    async def test_empty_queue_key_disappears(self, memory_store):
        await memory_store.push("q", "a")
        await memory_store.pop("q")

        # 키가 사라졌으므로 문자열로 재사용 가능
        assert await memory_store.set(_cmd(key="q", condition=Condition.NX)) is True

    @pytest.mark.asyncio
    async def test_push_on_string_is_wrongtype(self, memory_store):
        await memory_store.set(_cmd())

        with pytest.raises(StoreOperationError) as exc:
            await memory_store.push("k", "a")
        assert str(exc.value) == WRONGTYPE

    @pytest.mark.asyncio
    async def test_pop_on_string_is_wrongtype(self, memory_store):
        await memory_store.set(_cmd())

        with pytest.raises(StoreOperationError):
            await memory_store.pop("k")

    @pytest.mark.asyncio
    async def test_concurrent_pushes_keep_every_element(self, memory_store):
        await asyncio.gather(*(memory_store.push("q", f"x{i}") for i in range(50)))

        popped = []
        while (element := await memory_store.pop("q")) is not None:
            popped.append(element)
        assert sorted(popped) == sorted(f"x{i}" for i in range(50))

    @given(st.lists(
        st.text(alphabet=st.characters(blacklist_categories=("Zs", "Zl", "Zp", "Cc", "Cs")), min_size=1),
        min_size=1, max_size=30,
    ))
    def test_pop_returns_push_order(self, tokens):
        async def scenario():
            store = InMemoryStore()
            await store.push("q", " ".join(tokens))
            return [await store.pop("q") for _ in tokens]

        assert asyncio.run(scenario()) == tokens

    @pytest.mark.asyncio
    async def test_ping_and_close(self, memory_store):
        await memory_store.set(_cmd())

        assert await memory_store.ping() is True
        await memory_store.close()
        assert await memory_store.get("k") is None
