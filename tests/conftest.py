import pytest

from tessera import array, field, integer, obj, optional, string


@pytest.fixture(scope="function")
def user_type():
    return obj(
        {
            "name": string(min_length=1),
            "age": integer(minimum=0),
            "email": optional(string()),
            "password": field(string(), sensitive=True),
            "tags": array(string()),
        },
        name="user",
    )


@pytest.fixture(scope="function")
def valid_user() -> dict:
    return {
        "name": "Alice",
        "age": 30,
        "password": "hunter2",
        "tags": ["admin"],
    }
