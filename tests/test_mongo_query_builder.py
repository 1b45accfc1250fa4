"""MongoQueryBuilder tests."""
from datasources.mongo import MongoQueryBuilder


class TestMongoQueryBuilder:
    """Test MongoQueryBuilder rendering."""

    def test_no_columns_projects_everything(self):
        assert MongoQueryBuilder().build_projection() is None
        assert MongoQueryBuilder().select([]).build_projection() is None

    def test_projection_includes_selected_fields(self):
        projection = MongoQueryBuilder().select(["code", "title"]).build_projection()
        assert projection == {"code": 1, "title": 1}
        assert list(projection) == ["code", "title"]

    def test_unset_filter_matches_everything(self):
        assert MongoQueryBuilder().filter == {}

    def test_where_replaces_filter(self):
        builder = MongoQueryBuilder().where({"category": "math"}).where({"seats": {"$gt": 0}})
        assert builder.filter == {"seats": {"$gt": 0}}

    def test_filter_is_a_copy(self):
        source = {"category": "math"}
        builder = MongoQueryBuilder().where(source)
        source["category"] = "art"
        builder.filter["extra"] = 1
        assert builder.filter == {"category": "math"}

    def test_find_options_only_include_what_was_set(self):
        assert MongoQueryBuilder().build_find_options() == {"projection": None}

    def test_find_options(self):
        options = (
            MongoQueryBuilder()
            .select(["code"])
            .limit(10)
            .skip(20)
            .sort([("created_at", -1), ("code", 1)])
            .build_find_options()
        )
        assert options == {
            "projection": {"code": 1},
            "limit": 10,
            "skip": 20,
            "sort": [("created_at", -1), ("code", 1)],
        }

    def test_non_positive_limit_and_skip_are_unbounded(self):
        options = MongoQueryBuilder().limit(0).skip(-5).build_find_options()
        assert "limit" not in options
        assert "skip" not in options

    def test_sort_accepts_mapping(self):
        options = MongoQueryBuilder().sort({"created_at": -1}).build_find_one_options()
        assert options == {"projection": None, "sort": [("created_at", -1)]}

    def test_find_one_options_ignore_pagination(self):
        options = MongoQueryBuilder().limit(5).skip(5).build_find_one_options()
        assert options == {"projection": None}

    def test_update_is_wrapped_in_set(self):
        builder = MongoQueryBuilder().update({"title": "Algebra II", "seats": 5})
        assert builder.build_update() == {"$set": {"title": "Algebra II", "seats": 5}}
        assert builder.update_document == {"title": "Algebra II", "seats": 5}

    def test_no_update(self):
        assert MongoQueryBuilder().build_update() is None
        assert MongoQueryBuilder().update({}).build_update() is None

    def test_methods_chain_on_same_instance(self):
        builder = MongoQueryBuilder()
        assert builder.select(["a"]) is builder
        assert builder.where({"a": 1}) is builder
        assert builder.update({"a": 2}) is builder
        assert builder.limit(1).skip(1).sort([("a", 1)]) is builder
