"""Quote Companions — verifies full-replace semantics of the companion list.

Invariants:
    - update_companions(q, []) leaves zero rows
    - Replacing [c1] with [c1, c2] yields exactly two fresh rows
    - Companions given on create/update travel with the quote
"""

import pytest
from sqlalchemy import func, select

from aquatour.core.errors import NotFoundError, ValidationError
from aquatour.models import Companion

C1 = {"first_name": "Lucía", "last_name": "Gómez", "is_minor": True}
C2 = {"firstName": "Pedro", "lastName": "Gómez", "nationality": "Colombia"}


async def _companion_count(gateway, quote_id):
    return await gateway.scalar(
        select(func.count()).select_from(Companion).where(Companion.quote_id == quote_id),
    )


async def test_quote_projection_always_has_companions(quotes, quote_payload):
    quote = await quotes.create(quote_payload())
    assert quote["companions"] == []


async def test_create_with_companions(quotes, quote_payload):
    quote = await quotes.create(quote_payload(companions=[C1]))
    assert [c["first_name"] for c in quote["companions"]] == ["Lucía"]
    assert quote["companions"][0]["nationality"] == "Perú"
    assert quote["companions"][0]["is_minor"] is True


async def test_replace_with_empty_list_removes_all(quotes, quote_payload, gateway):
    quote = await quotes.create(quote_payload(companions=[C1, C2]))
    assert await quotes.update_companions(quote["id"], []) == []
    assert await _companion_count(gateway, quote["id"]) == 0


async def test_replace_yields_fresh_rows(quotes, quote_payload, gateway):
    quote = await quotes.create(quote_payload())
    first = await quotes.update_companions(quote["id"], [C1])
    second = await quotes.update_companions(quote["id"], [C1, C2])

    assert len(second) == 2
    assert await _companion_count(gateway, quote["id"]) == 2
    assert first[0]["id"] not in {c["id"] for c in second}
    assert {c["first_name"] for c in second} == {"Lucía", "Pedro"}


async def test_update_without_companions_key_leaves_them(quotes, quote_payload):
    quote = await quotes.create(quote_payload(companions=[C1]))
    updated = await quotes.update(quote["id"], {"estimatedPrice": "1500"})
    assert len(updated["companions"]) == 1


async def test_update_with_companions_key_replaces(quotes, quote_payload):
    quote = await quotes.create(quote_payload(companions=[C1]))
    updated = await quotes.update(quote["id"], {"companions": [C2, C2]})
    assert [c["first_name"] for c in updated["companions"]] == ["Pedro", "Pedro"]


async def test_invalid_companion_rolls_back_replace(quotes, quote_payload, gateway):
    quote = await quotes.create(quote_payload(companions=[C1]))
    with pytest.raises(ValidationError):
        await quotes.update_companions(quote["id"], [C2, {"first_name": "Sin apellido"}])
    assert await _companion_count(gateway, quote["id"]) == 1


async def test_replace_on_missing_quote(quotes):
    with pytest.raises(NotFoundError):
        await quotes.update_companions(999, [C1])


async def test_deleting_quote_cascades_companions(quotes, quote_payload, gateway):
    quote = await quotes.create(quote_payload(companions=[C1, C2]))
    assert await quotes.delete(quote["id"]) is True
    assert await _companion_count(gateway, quote["id"]) == 0
