"""Shared provider payloads and a mock HTTP transport."""

import json

import httpx
import pytest


@pytest.fixture
def polymarket_payload():
    return [
        {
            "condition_id": "0xaaa",
            "question": "Will Bitcoin hit $100k by 2025?",
            "tokens": [
                {"outcome": "Yes", "price": "0.55"},
                {"outcome": "No", "price": "0.47"},
            ],
            "volume": "12000",
            "end_date_iso": "2025-12-31T00:00:00Z",
        },
        {
            "condition_id": "0xbbb",
            "question": "Will the Lakers win the NBA championship?",
            "outcomes": [{"price": 0.30}, {"price": 0.72}],
            "end_date_iso": "2025-06-30T00:00:00Z",
        },
        {
            "condition_id": "0xccc",
            "question": "Will it snow in Paris on Christmas?",
        },
    ]


@pytest.fixture
def metaculus_payload():
    return {
        "results": [
            {
                "id": 101,
                "title": "Will bitcoin hit $100k by 2025",
                "possibility_type": "binary",
                "community_prediction": {"full": {"q2": 0.6}},
                "resolve_time": "2026-01-01T00:00:00Z",
            },
            {
                "id": 102,
                "title": "How many seats will Congress flip?",
                "possibility_type": "continuous",
                "community_prediction": {"full": {"q2": 0.3}},
            },
            {
                "id": 103,
                "title": "Will OpenAI release a new model?",
                "possibility_type": "binary",
                "community_prediction": {"mean": 0.8},
            },
        ]
    }


@pytest.fixture
def manifold_payload():
    return [
        {
            "id": "m1",
            "question": "WILL BITCOIN HIT $100K BY 2025??",
            "probability": 0.58,
            "volume24Hours": 321.5,
            "url": "https://manifold.markets/u/btc-100k",
            "closeTime": 1767225600000,
        },
        {
            "id": "m2",
            "question": "Will the Lakers win the NBA championship",
            "probability": 0.25,
            "url": "https://manifold.markets/u/lakers",
        },
    ]


@pytest.fixture
def provider_transport(polymarket_payload, metaculus_payload, manifold_payload):
    """MockTransport answering each provider host with its fixture payload."""

    def handler(request: httpx.Request) -> httpx.Response:
        host = request.url.host
        if host == "clob.polymarket.com":
            return httpx.Response(200, json=polymarket_payload)
        if host == "www.metaculus.com":
            return httpx.Response(200, json=metaculus_payload)
        if host == "api.manifold.markets":
            return httpx.Response(200, json=manifold_payload)
        return httpx.Response(404, text=json.dumps({"detail": "unknown host"}))

    return httpx.MockTransport(handler)
