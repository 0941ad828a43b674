import pytest

from places_relay.services.pagination import PaginationToken, continuation_token, next_radius

MAX_RADIUS = 500_000


def test_encode_wire_format():
    assert PaginationToken(page=3, radius=200000).encode() == "page_3_radius_200000"


@pytest.mark.parametrize("page,radius", [(1, 1), (2, 50000), (17, 500000), (1000, 123)])
def test_decode_reverses_encode(page, radius):
    token = PaginationToken.decode(PaginationToken(page=page, radius=radius).encode())
    assert (token.page, token.radius) == (page, radius)


@pytest.mark.parametrize("raw", [
    None,
    "",
    "abc",
    "page_x_radius_1",
    "page_1_radius_",
    "page_1_radius_5_extra",
    " page_1_radius_5",
    "page_-1_radius_5",
    "page_0_radius_5",
    "page_2_radius_0",
    "page_١_radius_5",
    "CmRaAAAA-provider-token",
    "page_" + "9" * 5000 + "_radius_1",
    "page_1_radius_" + "9" * 19,
])
def test_decode_rejects_foreign_strings(raw):
    assert PaginationToken.decode(raw) is None


def test_continuation_doubles_radius():
    token = continuation_token(1, 50000, result_count=12, max_radius=MAX_RADIUS)
    assert token.encode() == "page_2_radius_100000"


def test_no_continuation_without_results():
    assert continuation_token(4, 50000, result_count=0, max_radius=MAX_RADIUS) is None


def test_radius_growth_is_capped():
    page, radius = 1, 400000
    seen = []
    token = continuation_token(page, radius, result_count=5, max_radius=MAX_RADIUS)
    while token is not None:
        seen.append(token.radius)
        token = continuation_token(token.page, token.radius, result_count=5, max_radius=MAX_RADIUS)
    assert seen == [500000]
    assert next_radius(500000, MAX_RADIUS) == MAX_RADIUS
