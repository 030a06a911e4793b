"""Tests for query string assembly."""

from atlassian_services.core.query import Query, endpoint_with_query


class TestQuery:
    """Tests for the Query builder."""

    def test_pagination_and_expand(self) -> None:
        """Test pagination first, then comma-joined expansions."""
        query = Query().add("start", 0).add("limit", 25).add_list("expand", ["a", "b"])
        assert query.encode() == "start=0&limit=25&expand=a,b"

    def test_add_always_appends(self) -> None:
        """Test that zero values are still sent."""
        assert Query().add("startAt", 0).add("maxResults", 0).encode() == "startAt=0&maxResults=0"

    def test_booleans(self) -> None:
        """Test that booleans render lowercase."""
        query = Query().add("deleteSubtasks", False).add("includeAttributes", True)
        assert query.encode() == "deleteSubtasks=false&includeAttributes=true"

    def test_add_optional_skips_empty(self) -> None:
        """Test that empty optional values are left out."""
        query = Query().add_optional("cursor", "").add_optional("status", None)
        assert not query
        assert query.encode() == ""

    def test_add_optional_keeps_value(self) -> None:
        """Test that a set optional value is sent."""
        assert Query().add_optional("status", "trashed").encode() == "status=trashed"

    def test_add_list_empty(self) -> None:
        """Test that empty and missing lists are left out."""
        query = Query().add_list("expand", []).add_list("fields", None)
        assert not query

    def test_add_list_keeps_order_and_duplicates(self) -> None:
        """Test that values are joined as given."""
        query = Query().add_list("fields", ["status", "summary", "status"])
        assert query.encode() == "fields=status,summary,status"

    def test_values_are_encoded(self) -> None:
        """Test that reserved characters are percent-encoded."""
        query = Query().add("jql", "project = ITI & status = Done")
        assert query.encode() == "jql=project+%3D+ITI+%26+status+%3D+Done"

    def test_insertion_order(self) -> None:
        """Test that keys are not sorted."""
        query = Query().add("z", 1).add("a", 2)
        assert query.encode() == "z=1&a=2"


class TestEndpointWithQuery:
    """Tests for endpoint_with_query."""

    def test_with_query(self) -> None:
        """Test that the query is appended."""
        query = Query().add("start", 0)
        assert endpoint_with_query("wiki/rest/api/content/1", query) == (
            "wiki/rest/api/content/1?start=0"
        )

    def test_without_query(self) -> None:
        """Test that an empty query leaves the path alone."""
        assert endpoint_with_query("admin/v1/orgs", Query()) == "admin/v1/orgs"
