"""Unit tests for the generic stats reducer."""

import asyncio

import pytest
from conftest import aiter_of, failing_aiter

from confeti.components.stats.reducer_comp import collect_all, collect_totals, reduce_groups, reduce_one
from confeti.helpers.dto.report_dto import SpeakerYearStats
from confeti.helpers.exceptions import ConsistencyViolation, StatisticsError, TransformError


async def _years(_speaker_id, group):
    return await collect_totals(group, key_fn=lambda s: s.year, transform=dict)


class TestCollectAll:
    """Test flat collection."""

    @pytest.mark.asyncio
    async def test_collects_in_order(self, speaker_rows):
        assert await collect_all(aiter_of(speaker_rows)) == speaker_rows

    @pytest.mark.asyncio
    async def test_fetch_failure_is_single_statistics_error(self, speaker_rows):
        with pytest.raises(StatisticsError, match="connection reset") as exc_info:
            await collect_all(failing_aiter(speaker_rows, OSError("connection reset")))

        assert isinstance(exc_info.value.__cause__, OSError)


class TestCollectTotals:
    """Test group-reduce-by-key."""

    @pytest.mark.asyncio
    async def test_maps_key_to_total_then_transforms(self, speaker_rows):
        s1 = [row for row in speaker_rows if row.speaker_id == "s1"]

        result = await collect_totals(aiter_of(s1), key_fn=lambda s: s.year, transform=lambda m: sorted(m.items()))

        assert result == [(2022, 2), (2023, 3)]

    @pytest.mark.asyncio
    async def test_duplicate_key_is_caller_error(self, speaker_rows):
        with pytest.raises(ConsistencyViolation, match="Duplicate stats key 2023"):
            await collect_totals(aiter_of(speaker_rows), key_fn=lambda s: s.year, transform=dict)

    @pytest.mark.asyncio
    async def test_transform_failure(self, speaker_rows):
        def broken(_totals):
            raise KeyError("missing")

        with pytest.raises(TransformError, match="missing"):
            await collect_totals(aiter_of(speaker_rows[:1]), key_fn=lambda s: s.year, transform=broken)


class TestReduceOne:
    """Test the single-element variant."""

    @pytest.mark.asyncio
    async def test_transforms_element(self):
        async def fetch():
            return SpeakerYearStats(speaker_id="s1", year=2023, report_total=3)

        assert await reduce_one(fetch(), lambda s: s.report_total) == 3

    @pytest.mark.asyncio
    async def test_missing_element_reaches_transform(self):
        async def fetch():
            return None

        assert await reduce_one(fetch(), lambda s: s is None) is True


class TestReduceGroups:
    """Test group-with-async-reduce, zipped with key."""

    @pytest.mark.asyncio
    async def test_pairs_summary_with_key(self, speaker_rows):
        result = await reduce_groups(
            aiter_of(speaker_rows),
            group_fn=lambda s: s.speaker_id,
            reduce_group=_years,
            transform=lambda years, speaker_id: (speaker_id, years),
        )

        assert sorted(result) == [("s1", {2022: 2, 2023: 3}), ("s2", {2023: 1})]

    @pytest.mark.asyncio
    async def test_reducer_may_await_other_work(self, speaker_rows):
        async def nested_lookup(speaker_id, group):
            await asyncio.sleep(0)
            return len([row async for row in group])

        result = await reduce_groups(
            aiter_of(speaker_rows),
            group_fn=lambda s: s.speaker_id,
            reduce_group=nested_lookup,
            transform=lambda count, speaker_id: f"{speaker_id}:{count}",
        )

        assert sorted(result) == ["s1:2", "s2:1"]

    @pytest.mark.asyncio
    async def test_reducer_failure_is_transform_error(self, speaker_rows):
        async def broken(_speaker_id, _group):
            raise RuntimeError("lookup timed out")

        with pytest.raises(TransformError, match="lookup timed out"):
            await reduce_groups(
                aiter_of(speaker_rows),
                group_fn=lambda s: s.speaker_id,
                reduce_group=broken,
                transform=lambda summary, key: summary,
            )

    @pytest.mark.asyncio
    async def test_grouping_failure_is_statistics_error(self, speaker_rows):
        def no_speaker(_stats):
            raise AttributeError("no speaker")

        with pytest.raises(StatisticsError, match="no speaker"):
            await reduce_groups(
                aiter_of(speaker_rows),
                group_fn=no_speaker,
                reduce_group=_years,
                transform=lambda summary, key: summary,
            )
