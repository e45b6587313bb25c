"""Provider normalizer tests."""

import pytest

from dissonance.ingestion.manifold.normalize import normalize_manifold
from dissonance.ingestion.metaculus.normalize import normalize_metaculus
from dissonance.ingestion.polymarket.normalize import normalize_polymarket


def test_polymarket_prices_ids_and_defaults(polymarket_payload):
    markets = normalize_polymarket(polymarket_payload)
    assert [m.id for m in markets] == ["poly_0xaaa", "poly_0xbbb", "poly_0xccc"]
    btc, lakers, snow = markets
    assert btc.source == "Polymarket"
    assert btc.category == "crypto"
    assert btc.yes_odds == 0.55 and btc.no_odds == 0.47
    assert btc.volume == 12000.0
    assert btc.url == "https://polymarket.com/event/0xaaa"
    assert btc.end_date == "2025-12-31T00:00:00Z"
    # 'outcomes' takes precedence over 'tokens'
    assert lakers.yes_odds == 0.30 and lakers.no_odds == 0.72
    assert lakers.volume == 0.0
    assert lakers.category == "sports"
    # no prices at all -> neutral 0.5/0.5
    assert snow.yes_odds == 0.5 and snow.no_odds == 0.5


def test_polymarket_drop_default_odds(polymarket_payload):
    markets = normalize_polymarket(polymarket_payload, drop_default_odds=True)
    assert [m.id for m in markets] == ["poly_0xaaa", "poly_0xbbb"]


def test_polymarket_paginated_page_and_limit(polymarket_payload):
    page = {"data": polymarket_payload, "next_cursor": "LTE="}
    assert len(normalize_polymarket(page)) == 3
    assert len(normalize_polymarket(page, limit=1)) == 1


def test_polymarket_skips_malformed_rows():
    payload = [
        {"condition_id": "x1", "question": ""},
        {"condition_id": "x2", "question": "Q?", "tokens": [{"price": "abc"}, {"price": "0.4"}]},
        {"condition_id": "x3", "question": "Q2?", "tokens": [{"price": "1.7"}, {"price": "0.4"}]},
        "not a dict",
    ]
    assert normalize_polymarket(payload) == []


def test_polymarket_unexpected_shape_is_empty():
    assert normalize_polymarket({"error": "rate limited"}) == []
    assert normalize_polymarket(None) == []


def test_metaculus_binary_only(metaculus_payload):
    markets = normalize_metaculus(metaculus_payload)
    assert [m.id for m in markets] == ["meta_101", "meta_103"]
    btc, openai = markets
    assert btc.yes_odds == 0.6
    assert btc.no_odds == pytest.approx(0.4)
    assert btc.volume is None
    assert btc.url == "https://www.metaculus.com/questions/101"
    assert btc.end_date == "2026-01-01T00:00:00Z"
    # falls back to the mean when there is no full.q2
    assert openai.yes_odds == 0.8
    assert openai.category == "tech"


def test_metaculus_missing_prediction_defaults_to_half():
    payload = {"results": [{"id": 7, "title": "Will X happen?", "possibility_type": "binary"}]}
    (m,) = normalize_metaculus(payload)
    assert m.yes_odds == 0.5 and m.no_odds == 0.5


def test_metaculus_missing_results_is_empty():
    assert normalize_metaculus({}) == []
    assert normalize_metaculus([]) == []


def test_manifold_direct_and_complement(manifold_payload):
    markets = normalize_manifold(manifold_payload)
    assert [m.id for m in markets] == ["mani_m1", "mani_m2"]
    btc, lakers = markets
    assert btc.yes_odds == 0.58
    assert btc.no_odds == pytest.approx(0.42)
    assert btc.volume == 321.5
    assert btc.url == "https://manifold.markets/u/btc-100k"
    assert btc.end_date == "1767225600000"
    assert lakers.volume == 0.0
    assert lakers.end_date is None


def test_manifold_zero_probability_uses_default():
    (m,) = normalize_manifold([{"id": "z", "question": "Will Z?", "probability": 0}])
    assert m.yes_odds == 0.5


def test_normalizers_are_idempotent(polymarket_payload, metaculus_payload, manifold_payload):
    assert normalize_polymarket(polymarket_payload) == normalize_polymarket(polymarket_payload)
    assert normalize_metaculus(metaculus_payload) == normalize_metaculus(metaculus_payload)
    assert normalize_manifold(manifold_payload) == normalize_manifold(manifold_payload)
