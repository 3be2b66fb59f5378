"""User Schemas — strict body parsing and _id serialization."""

import pytest
from pydantic import ValidationError

from users_api.core.domain_types import User
from users_api.schemas.user import UserBody, UserCreatedResponse, UserOut, UserResponse


def test_body_defaults_to_zero_values():
    body = UserBody.model_validate_json("{}")
    assert (body.name, body.age) == ("", 0)


def test_body_ignores_unknown_fields():
    body = UserBody.model_validate_json('{"_id": "abc", "name": "A", "age": 1, "x": true}')
    assert body.to_user() == User(name="A", age=1)


@pytest.mark.parametrize("raw", [
    '{"name": "A", "age": "30"}',
    '{"name": "A", "age": 30.5}',
    '{"name": null}',
    '{"name": 5}',
])
def test_body_rejects_wrong_types(raw):
    with pytest.raises(ValidationError):
        UserBody.model_validate_json(raw)


def test_user_response_serializes_id_as_underscore_id():
    resp = UserResponse.from_user(User(name="A", age=2, id="65f0c0ffee0000000000beef"))
    assert resp.model_dump(by_alias=True) == {
        "_id": "65f0c0ffee0000000000beef", "name": "A", "age": 2,
    }


def test_user_response_accepts_alias_on_input():
    resp = UserResponse.model_validate({"_id": "x", "name": "A", "age": 2})
    assert resp.id == "x"


def test_created_response_has_default_message():
    resp = UserCreatedResponse(id="x", user=UserOut(name="A", age=1))
    assert resp.model_dump()["message"] == "User created successfully"


@pytest.mark.parametrize("age", [2**63, -(2**63) - 1])
def test_body_rejects_age_outside_int64(age):
    with pytest.raises(ValidationError):
        UserBody(name="A", age=age)


@pytest.mark.parametrize("age", [2**63 - 1, -(2**63)])
def test_body_accepts_int64_bounds(age):
    assert UserBody(name="A", age=age).age == age
