"""Nivoda schema adapters.

Nivoda accounts differ in how they authenticate and in the shape of the
search query. Each adapter bundles the GraphQL documents and the response
paths for one schema, so the client can stay schema-agnostic.
"""
from dataclasses import dataclass

AUTH_QUERY = """
  query Auth($username: String!, $password: String!) {
    authenticate {
      username_and_password(username: $username, password: $password) {
        token
      }
    }
  }
"""

_DIAMOND_FIELDS = """
      items {
        id
        price
        diamond {
          image
          certificate {
            carats
            shape
            color
            clarity
            cut
            certNumber
          }
        }
      }
"""


def _diamonds_by_query(include_total: bool) -> str:
    total = "      total_count\n" if include_total else ""
    return (
        "\n  query DiamondsByQuery($offset: Int, $limit: Int, $query: DiamondQuery) {\n"
        "    diamonds_by_query(offset: $offset, limit: $limit, query: $query) {"
        f"{_DIAMOND_FIELDS}{total}"
        "    }\n"
        "  }\n"
    )


def _dig(data: dict | None, *path: str):
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


@dataclass(frozen=True)
class SchemaAdapter:
    name: str
    # "bearer": log in once and send the cached token; "basic": send credentials on every call
    auth_scheme: str
    result_field: str = "diamonds_by_query"
    auth_document: str | None = None
    token_path: tuple[str, ...] = ()

    def search_document(self, include_total: bool = False) -> str:
        return _diamonds_by_query(include_total)

    def extract_token(self, data: dict | None) -> str | None:
        token = _dig(data, *self.token_path) if self.token_path else None
        return token if isinstance(token, str) and token else None

    def extract_items(self, data: dict | None) -> list[dict]:
        items = _dig(data, self.result_field, "items")
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    def extract_total(self, data: dict | None) -> int | None:
        total = _dig(data, self.result_field, "total_count")
        if isinstance(total, int) and not isinstance(total, bool):
            return total
        return None


NIVODA_V4 = SchemaAdapter(
    name="v4",
    auth_scheme="bearer",
    auth_document=AUTH_QUERY,
    token_path=("authenticate", "username_and_password", "token"),
)

NIVODA_BASIC = SchemaAdapter(
    name="basic",
    auth_scheme="basic",
)

SCHEMA_ADAPTERS: dict[str, SchemaAdapter] = {
    NIVODA_V4.name: NIVODA_V4,
    NIVODA_BASIC.name: NIVODA_BASIC,
}


def get_adapter(name: str) -> SchemaAdapter:
    try:
        return SCHEMA_ADAPTERS[name]
    except KeyError:
        raise ValueError(f"Unknown Nivoda schema: {name!r}") from None
