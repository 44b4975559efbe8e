import pytest
from pydantic import ValidationError

from klondike.cards import card_code
from klondike.deal_schema import DealOrder
from klondike.deck import build_deck


def canonical_codes():
    return [card_code(card) for card in build_deck()]


def test_deal_order_round_trips_to_cards():
    codes = canonical_codes()
    order = DealOrder(cards=[code.upper() for code in codes])

    assert order.cards == codes
    cards = order.to_cards()
    assert [card_code(card) for card in cards] == codes
    assert not any(card.is_face_up() for card in cards)


def test_deal_order_needs_the_full_deck():
    with pytest.raises(ValidationError):
        DealOrder(cards=canonical_codes()[:51])


def test_deal_order_reports_duplicates_and_missing_cards():
    codes = canonical_codes()
    codes[0] = codes[1]
    with pytest.raises(ValidationError) as excinfo:
        DealOrder(cards=codes)
    message = str(excinfo.value)
    assert "Duplicate cards in deal order: ad" in message
    assert "missing: ac" in message


def test_deal_order_rejects_malformed_codes():
    codes = canonical_codes()
    codes[10] = "zz"
    with pytest.raises(ValidationError):
        DealOrder(cards=codes)
