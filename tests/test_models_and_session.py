import json

import pytest

from gigs.client import Endpoints
from gigs.core.errors import FailedFetch
from gigs.core.models import Gig, User, decode_bearer, decode_gigs
from gigs.core.session import Session


def test_user_json_is_pretty_printed():
    body = User(username="a", password="b").to_json()

    assert b"\n" in body
    assert json.loads(body) == {"username": "a", "password": "b"}


def test_decode_bearer_rejects_missing_token():
    assert decode_bearer(b'{"token": "abc"}').token == "abc"
    with pytest.raises(ValueError):
        decode_bearer(b"{}")


def test_decode_gigs_single_object_only_when_allowed():
    assert [g.id for g in decode_gigs(b'{"id": "1"}', allow_single=True)] == ["1"]
    with pytest.raises(ValueError):
        decode_gigs(b'{"id": "1"}')


def test_gig_payload_skips_unset_fields():
    assert Gig(title="x").to_payload() == {"title": "x"}
    assert Gig.model_validate({"dueDate": "d", "extra": [1]}).to_payload() == {"dueDate": "d", "extra": [1]}


def test_endpoints_derived_from_base():
    e = Endpoints.from_base("https://host/api/")

    assert e.sign_up == "https://host/api/users/signup"
    assert e.log_in == "https://host/api/users/login"
    assert e.list_gigs == "https://host/api/gigs/"
    assert e.create_gig == "https://host/api/gigs"


def test_error_carries_code_op_and_status():
    err = FailedFetch("list_gigs", "http 503", status_code=503)

    assert (err.code, err.op, err.message, err.status_code) == ("failed_fetch", "list_gigs", "http 503", 503)
    assert str(err) == "http 503"


@pytest.mark.asyncio
async def test_session_replace_gigs_copies_list():
    s = Session()
    incoming = [Gig(id="1")]

    returned = await s.replace_gigs(incoming)
    incoming.append(Gig(id="2"))

    assert [g.id for g in s.gigs] == ["1"]
    assert returned == s.gigs
    assert returned is not s.gigs
