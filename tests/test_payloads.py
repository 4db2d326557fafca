# ==============================================
# Tests for per-operation payload helpers
# ==============================================

import datetime

import pytest
from bson import ObjectId

from mongoshape.errors import InvalidShapeError, MalformedInputError
from mongoshape.normalization import (
    normalize_documents,
    normalize_index_specs,
    normalize_pipeline,
    normalize_update,
    parse_filter,
)


class TestParseFilter:

    @pytest.mark.parametrize("empty", [None, "", {}])
    def test_empty_filter_matches_everything(self, empty):
        assert parse_filter(empty) == {}

    def test_text_filter(self, object_id_hex):
        assert parse_filter(f'{{"_id": "{object_id_hex}"}}') == {"_id": ObjectId(object_id_hex)}

    def test_policy_is_applied(self, object_id_hex):
        assert parse_filter({"_id": object_id_hex}, "none") == {"_id": object_id_hex}

    @pytest.mark.parametrize("bad", [[{"a": 1}], "[1, 2]", 5])
    def test_filter_must_be_object(self, bad):
        with pytest.raises(InvalidShapeError, match="plain object"):
            parse_filter(bad)

    def test_malformed_text(self):
        with pytest.raises(MalformedInputError):
            parse_filter("{not json")


class TestNormalizeUpdate:

    def test_operator_update(self, object_id_hex):
        result = normalize_update({
            "$set": {"ownerId": object_id_hex, "seenAt": "2024-01-01T00:00:00Z"},
            "$inc": {"visits": 1},
        })
        assert result["$set"]["ownerId"] == ObjectId(object_id_hex)
        assert result["$set"]["seenAt"] == datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
        assert result["$inc"] == {"visits": 1}

    def test_replacement_document_is_rejected(self):
        with pytest.raises(InvalidShapeError) as exc_info:
            normalize_update({"name": "x"})
        assert "$set" in str(exc_info.value)
        assert "$addToSet" in str(exc_info.value)

    def test_update_must_be_object(self):
        with pytest.raises(InvalidShapeError, match="update object"):
            normalize_update([{"$set": {"a": 1}}])

    def test_text_update(self):
        assert normalize_update('{"$unset": {"legacy": ""}}') == {"$unset": {"legacy": ""}}


class TestNormalizePipeline:

    def test_stages_are_normalized(self, object_id_hex):
        result = normalize_pipeline([
            {"$match": {"_id": object_id_hex}},
            {"$limit": 5},
        ])
        assert result == [{"$match": {"_id": ObjectId(object_id_hex)}}, {"$limit": 5}]

    def test_non_object_stages_pass_through(self):
        assert normalize_pipeline([{"$limit": 1}, "junk"]) == [{"$limit": 1}, "junk"]

    def test_empty_pipeline(self):
        assert normalize_pipeline([]) == []

    def test_pipeline_must_be_array(self):
        with pytest.raises(InvalidShapeError, match="array"):
            normalize_pipeline({"$match": {}})


class TestNormalizeDocuments:

    def test_documents(self, object_id_hex):
        result = normalize_documents([{"_id": object_id_hex}, {"name": "b"}], "force")
        assert result == [{"_id": ObjectId(object_id_hex)}, {"name": "b"}]

    @pytest.mark.parametrize("bad", [[], {"a": 1}, "[]"])
    def test_needs_non_empty_array(self, bad):
        with pytest.raises(InvalidShapeError, match="non-empty array"):
            normalize_documents(bad)

    def test_each_document_must_be_object(self):
        with pytest.raises(InvalidShapeError, match="index 1"):
            normalize_documents([{"a": 1}, 5])


class TestNormalizeIndexSpecs:

    def test_key_is_normalized_and_options_kept(self, object_id_hex):
        specs = [{
            "key": {"createdAt": -1},
            "name": "created_desc",
            "unique": True,
            "partialFilterExpression": {"ownerId": object_id_hex},
        }]
        result = normalize_index_specs(specs)

        assert result == specs
        assert result[0] is not specs[0]
        assert result[0]["partialFilterExpression"]["ownerId"] == object_id_hex

    def test_missing_key(self):
        with pytest.raises(InvalidShapeError, match="'key'"):
            normalize_index_specs([{"name": "broken"}])

    def test_empty_list(self):
        with pytest.raises(InvalidShapeError, match="non-empty array"):
            normalize_index_specs([])
