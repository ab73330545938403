"""Unit tests for TokenSetRepository and SourceRepository."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.ob_common.errors import InternalError
from src.ob_registry.domain.repository import EMPTY_SCHEMA_HASH
from src.ob_registry.infrastructure.sources import SourceRepository
from src.ob_registry.infrastructure.token_sets import (
    TokenSetRepository,
    contract_wide_token_set_id,
    single_token_set_id,
)


def _result(row: object) -> MagicMock:
    result_mock = MagicMock()
    result_mock.fetchone.return_value = row
    return result_mock


def _row(**kwargs: object) -> MagicMock:
    row = MagicMock()
    for key, value in kwargs.items():
        setattr(row, key, value)
    return row


class TestTokenSetIds:
    def test_contract_wide(self) -> None:
        assert contract_wide_token_set_id("0xC0") == "contract:0xc0"

    def test_single_token(self) -> None:
        assert single_token_set_id("0xC0", "42") == "token:0xc0:42"


class TestTokenSetRepository:
    @pytest.mark.asyncio
    async def test_save_contract_wide_returns_id(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = [MagicMock(), _result(_row(id="contract:0xc0"))]

        token_set_id = await TokenSetRepository().save_contract_wide("0xc0", EMPTY_SCHEMA_HASH, db)

        assert token_set_id == "contract:0xc0"
        insert_params = db.execute.call_args_list[0].args[1]
        assert insert_params["token_id"] is None
        assert insert_params["schema_hash"] == EMPTY_SCHEMA_HASH

    @pytest.mark.asyncio
    async def test_save_single_token_returns_id(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = [MagicMock(), _result(_row(id="token:0xc0:9"))]

        token_set_id = await TokenSetRepository().save_single_token(
            "0xc0", "9", EMPTY_SCHEMA_HASH, db
        )

        assert token_set_id == "token:0xc0:9"
        assert db.execute.call_args_list[0].args[1]["token_id"] == "9"

    @pytest.mark.asyncio
    async def test_returns_none_when_not_stored(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = [MagicMock(), _result(None)]
        assert await TokenSetRepository().save_contract_wide("0xc0", EMPTY_SCHEMA_HASH, db) is None


class TestSourceRepository:
    @pytest.mark.asyncio
    async def test_existing_source(self) -> None:
        db = AsyncMock()
        db.execute.return_value = _result(_row(id=4))
        assert await SourceRepository().get_or_insert("nftx.io", db) == 4
        db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_inserts_missing_source(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = [_result(None), MagicMock(), _result(_row(id=11))]
        assert await SourceRepository().get_or_insert("nftx.io", db) == 11
        assert db.execute.await_count == 3

    @pytest.mark.asyncio
    async def test_memoizes_per_domain(self) -> None:
        db = AsyncMock()
        db.execute.return_value = _result(_row(id=4))
        repo = SourceRepository()
        await repo.get_or_insert("nftx.io", db)
        await repo.get_or_insert("nftx.io", db)
        db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_after_insert_raises(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = [_result(None), MagicMock(), _result(None)]
        with pytest.raises(InternalError):
            await SourceRepository().get_or_insert("nftx.io", db)
