import pytest

from infrastructure.core.errors import ConfigurationError
from infrastructure.core.routes import (
    DEFAULT_ROUTES,
    HttpMethod,
    RouteDefinition,
    RouteTable,
    path_prefixes,
    route,
    split_path,
)


def test_default_routes_have_ten_unique_entries() -> None:
    """
    Given: 기본 라우트 테이블
    When: 이름과 (method, path) 조합 수집
    Then: 10개 모두 고유
    """
    routes = list(DEFAULT_ROUTES)
    assert len(routes) == 10
    assert len({r.name for r in routes}) == 10
    assert len({r.key for r in routes}) == 10


def test_default_routes_preserve_declaration_order() -> None:
    names = [r.name for r in DEFAULT_ROUTES]
    assert names[0] == "deleteMicropost"
    assert names[-1] == "putUser"
    assert DEFAULT_ROUTES.get("getUsers") == route("getUsers", "GET", "/v1/users")
    assert DEFAULT_ROUTES.get("missing") is None


def test_default_routes_need_six_resource_paths() -> None:
    assert DEFAULT_ROUTES.resource_paths() == [
        "/",
        "/v1",
        "/v1/users",
        "/v1/users/{user_id}",
        "/v1/users/{user_id}/microposts",
        "/v1/users/{user_id}/microposts/{micropost_id}",
    ]


def test_duplicate_method_and_path_is_rejected() -> None:
    """
    Given: 동일한 (method, path)를 가진 두 라우트
    When: 라우트 테이블 생성
    Then: ConfigurationError 발생
    """
    with pytest.raises(ConfigurationError, match="Duplicate route binding"):
        RouteTable(
            [
                route("getUser", "GET", "/v1/users/{user_id}"),
                route("fetchUser", "GET", "/v1/users/{user_id}"),
            ]
        )


def test_duplicate_name_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Duplicate route name"):
        RouteTable(
            [
                route("getUser", "GET", "/v1/users/{user_id}"),
                route("getUser", "PUT", "/v1/users/{user_id}"),
            ]
        )


def test_same_path_with_different_methods_is_allowed() -> None:
    table = RouteTable(
        [
            route("getUser", "GET", "/v1/users/{user_id}"),
            route("putUser", "PUT", "/v1/users/{user_id}"),
        ]
    )
    assert len(table) == 2


def test_method_is_parsed_case_insensitively() -> None:
    assert route("getUsers", "get", "/v1/users").method is HttpMethod.GET


@pytest.mark.parametrize("method", ["PATCH", "", "HEAD"])
def test_unsupported_method_is_rejected(method: str) -> None:
    with pytest.raises(ConfigurationError, match="Unsupported HTTP method"):
        route("patchUser", method, "/v1/users/{user_id}")


@pytest.mark.parametrize(
    "path",
    [
        "v1/users",
        "/v1/users/",
        "/v1//users",
        "/v1/users/{user_id",
        "/v1/users/user_{id}",
        "/v1/{id}/items/{id}",
        "/v1/us ers",
    ],
)
def test_malformed_path_is_rejected(path: str) -> None:
    with pytest.raises(ConfigurationError):
        RouteDefinition(name="broken", method=HttpMethod.GET, path=path)


@pytest.mark.parametrize("name", ["", "get user", "a" * 65])
def test_invalid_route_name_is_rejected(name: str) -> None:
    with pytest.raises(ConfigurationError, match="Invalid route name"):
        route(name, "GET", "/v1/users")


def test_path_prefixes_lists_every_parent() -> None:
    assert path_prefixes("/v1/users/{user_id}/microposts") == [
        "/v1",
        "/v1/users",
        "/v1/users/{user_id}",
        "/v1/users/{user_id}/microposts",
    ]
    assert path_prefixes("/") == []
    assert split_path("/") == []


def test_route_table_rejects_non_route_entries() -> None:
    with pytest.raises(ConfigurationError):
        RouteTable([("getUsers", "GET", "/v1/users")])  # type: ignore[list-item]
