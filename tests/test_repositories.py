"""SQL gateways against a throwaway SQLite database."""
import asyncio
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import create_async_engine

from turfbook.database import build_session_factory, create_tables
from turfbook.discovery.filters import build_turf_filter
from turfbook.discovery.ports import ReviewGatewayError, TurfGatewayError, TurfGatewayTimeout
from turfbook.discovery.service import TurfDiscoveryService
from turfbook.models.turfs import GeoPoint, ReviewStats
from turfbook.repositories import SqlReviewRepository, SqlTurfRepository
from turfbook.repositories.tables import ReviewRow, TurfRow

NOW = datetime(2024, 5, 1, 12, 0, 0)


def turf_row(turf_id, name, city, status="approved", lng=None, lat=None, age_days=0):
    return TurfRow(
        turf_id=turf_id,
        name=name,
        address="1 Main Rd",
        city=city,
        state="KL",
        longitude=lng,
        latitude=lat,
        price_per_hour=900,
        court_size="7v7",
        turf_photos=[f"https://img.example.com/{turf_id}.jpg"],
        facilities=["parking"],
        status=status,
        created_at=NOW - timedelta(days=age_days),
    )


@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'turfs.db'}")
    await create_tables(engine)
    factory = build_session_factory(engine)

    async with factory() as session:
        session.add_all(
            [
                turf_row("t1", "Arena One", "Kochi", lng=76.29, lat=9.97, age_days=3),
                turf_row("t2", "Green Field", "Arendal", lng=80.27, lat=13.08, age_days=1),
                turf_row("t3", "Kick Off", "Coimbatore", lng=76.95, lat=11.01, age_days=2),
                turf_row("t4", "Arena Blocked", "Kochi", status="blocked"),
                turf_row("t5", "100%_Turf", "Madurai", age_days=5),
                ReviewRow(turf_id="t1", user_id="u1", rating=5),
                ReviewRow(turf_id="t1", user_id="u2", rating=4),
                ReviewRow(turf_id="t3", user_id="u1", rating=3),
                ReviewRow(turf_id="t3", user_id="u2", rating=4),
                ReviewRow(turf_id="t3", user_id="u3", rating=4),
            ]
        )
        await session.commit()

    yield factory
    await engine.dispose()


async def test_natural_order_is_newest_first(session_factory):
    repo = SqlTurfRepository(session_factory)
    result = await repo.find(build_turf_filter(""), skip=0, limit=10)

    assert [turf.turf_id for turf in result.items] == ["t2", "t3", "t1", "t5"]
    assert result.total == 4


async def test_search_matches_name_or_city(session_factory):
    repo = SqlTurfRepository(session_factory)
    result = await repo.find(build_turf_filter("AREN"), skip=0, limit=10)

    assert {turf.turf_id for turf in result.items} == {"t1", "t2"}
    assert result.total == 2


async def test_search_wildcards_are_literal(session_factory):
    repo = SqlTurfRepository(session_factory)

    percent = await repo.find(build_turf_filter("0%_"), skip=0, limit=10)
    assert [turf.turf_id for turf in percent.items] == ["t5"]

    underscore = await repo.find(build_turf_filter("a_e"), skip=0, limit=10)
    assert underscore.items == []


async def test_skip_and_limit_with_full_total(session_factory):
    repo = SqlTurfRepository(session_factory)
    result = await repo.find(build_turf_filter(""), skip=2, limit=1)

    assert [turf.turf_id for turf in result.items] == ["t1"]
    assert result.total == 4


async def test_anchor_orders_nearest_first(session_factory):
    repo = SqlTurfRepository(session_factory)
    anchor = GeoPoint(longitude=76.28, latitude=9.98)
    turf_filter = build_turf_filter("", location=anchor)

    result = await repo.find(turf_filter, skip=0, limit=10, anchor=anchor)

    assert [turf.turf_id for turf in result.items] == ["t1", "t3", "t2", "t5"]


async def test_rows_map_to_turf_models(session_factory):
    repo = SqlTurfRepository(session_factory)
    result = await repo.find(build_turf_filter("kick"), skip=0, limit=10)

    turf = result.items[0]
    assert turf.location.city == "Coimbatore"
    assert turf.location.coordinates == GeoPoint(longitude=76.95, latitude=11.01)
    assert turf.facilities == ["parking"]
    assert turf.status == "approved"


async def test_review_stats_aggregate(session_factory):
    repo = SqlReviewRepository(session_factory)

    assert await repo.get_review_stats("t1") == ReviewStats(average_rating=4.5, total_reviews=2)
    assert await repo.get_review_stats("t3") == ReviewStats(average_rating=3.7, total_reviews=3)
    assert await repo.get_review_stats("t2") == ReviewStats.empty()


async def test_review_stats_are_safe_to_run_concurrently(session_factory):
    repo = SqlReviewRepository(session_factory)
    results = await asyncio.gather(*[repo.get_review_stats(t) for t in ["t1", "t2", "t3"] * 3])
    assert [r.total_reviews for r in results] == [2, 0, 3] * 3


async def test_database_errors_are_wrapped(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    factory = build_session_factory(engine)  # no tables created

    with pytest.raises(TurfGatewayError) as turf_exc:
        await SqlTurfRepository(factory).find(build_turf_filter(""), 0, 10)
    assert isinstance(turf_exc.value.__cause__, OperationalError)

    with pytest.raises(ReviewGatewayError):
        await SqlReviewRepository(factory).get_review_stats("t1")

    await engine.dispose()


async def test_slow_query_times_out(session_factory, monkeypatch):
    repo = SqlTurfRepository(session_factory, timeout=0.01)

    async def hang(*args):
        await asyncio.sleep(1)

    monkeypatch.setattr(repo, "_find", hang)

    with pytest.raises(TurfGatewayTimeout):
        await repo.find(build_turf_filter(""), 0, 10)


async def test_far_out_page_is_empty_not_an_error(session_factory):
    service = TurfDiscoveryService(
        SqlTurfRepository(session_factory), SqlReviewRepository(session_factory)
    )

    for page in ["1e30", 9999999999999999999]:
        result = await service.list_turfs(page=page, page_size=10)
        assert result.turfs == []
        assert result.total_count == 4
        assert result.total_pages == 1


async def test_half_located_turf_sorts_with_unlocated(session_factory):
    async with session_factory() as session:
        session.add(turf_row("t6", "Half Mapped", "Kochi", lat=9.98))
        await session.commit()

    repo = SqlTurfRepository(session_factory)
    anchor = GeoPoint(longitude=76.28, latitude=9.98)
    result = await repo.find(build_turf_filter("", location=anchor), 0, 10, anchor=anchor)

    ids = [turf.turf_id for turf in result.items]
    assert ids[:3] == ["t1", "t3", "t2"]
    assert set(ids[3:]) == {"t5", "t6"}
