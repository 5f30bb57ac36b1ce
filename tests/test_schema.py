from collections import OrderedDict
from datetime import datetime
from unittest import TestCase

from osf_client import fields
from osf_client.exceptions import DeserializationError
from osf_client.schema import FieldSet, DocumentSchema
from osf_client.utils import AttributeDict


class SchemaTestCase(TestCase):

    def test_fieldset_schema(self):
        fs = FieldSet(OrderedDict((
            ("name", fields.String()),
            ("size", fields.Integer(nullable=True)),
        )))

        self.assertEqual({
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "size": {"type": ["integer", "null"]}
            }
        }, fs.response)

    def test_fieldset_convert(self):
        fs = FieldSet({
            "name": fields.String(),
            "tags": fields.Array(fields.String()),
            "materialized_path": fields.String(nullable=True)
        })

        self.assertEqual({"name": "cow.txt", "tags": ["moo"], "materialized_path": "/moo/cow.txt"},
                         fs.convert({"name": "cow.txt", "tags": ["moo"], "materialized_path": "/moo/cow.txt"}))

    def test_fieldset_convert_absent_is_none(self):
        fs = FieldSet({
            "name": fields.String(),
            "tags": fields.Array(fields.String())
        })

        self.assertEqual({"name": "osfstorage", "tags": None}, fs.convert({"name": "osfstorage"}))
        self.assertEqual({"name": "osfstorage", "tags": []}, fs.convert({"name": "osfstorage", "tags": []}))
        self.assertEqual({"name": None, "tags": None}, fs.convert(None))

    def test_fieldset_convert_ignores_unknown(self):
        fs = FieldSet({"name": fields.String()})
        self.assertEqual({"name": "osfstorage"}, fs.convert({"name": "osfstorage", "node": "v8x57"}))

    def test_fieldset_convert_invalid(self):
        fs = FieldSet({
            "name": fields.String(),
            "size": fields.Integer()
        })

        with self.assertRaises(DeserializationError) as cx:
            fs.convert({"name": 1, "size": "big"})

        self.assertEqual({
            "status": 422,
            "message": "Unprocessable Entity",
            "errors": [
                {
                    "validationOf": {"type": "string"},
                    "path": ("attributes", "name"),
                    "message": "1 is not of type 'string'"
                },
                {
                    "validationOf": {"type": "integer"},
                    "path": ("attributes", "size"),
                    "message": "'big' is not of type 'integer'"
                }
            ]
        }, cx.exception.as_dict())

    def test_fieldset_format(self):
        fs = FieldSet({
            "name": fields.String(),
            "tags": fields.Array(fields.String()),
            "date_modified": fields.DateTimeString(nullable=True)
        })

        folder = AttributeDict(name="moo", tags=None, date_modified=datetime(2016, 5, 10, 13, 53, 7, 886000))
        self.assertEqual({"name": "moo", "tags": None, "date_modified": "2016-05-10T13:53:07.886000"},
                         dict(fs.format(folder)))


class DocumentSchemaTestCase(TestCase):

    def test_valid_documents(self):
        for document in (
                {"data": None},
                {"data": []},
                {"data": {"type": "nodes", "id": "v8x57"}},
                {
                    "data": [{
                        "type": "nodes",
                        "id": "v8x57",
                        "attributes": {"title": "Raw Data"},
                        "relationships": {
                            "files": {"links": {"related": {"href": "https://api.osf.io/v2/nodes/v8x57/files/",
                                                            "meta": {}}}},
                            "parent": {"links": {"related": "https://api.osf.io/v2/nodes/r5s4u/"},
                                       "data": {"type": "nodes", "id": "r5s4u"}}
                        },
                        "links": {"self": "https://api.osf.io/v2/nodes/v8x57/", "html": None}
                    }],
                    "links": {"first": None, "next": "https://api.osf.io/v2/nodes/?page=2",
                              "meta": {"total": 11, "per_page": 10}},
                    "meta": {"version": "2.0"}
                }):
            self.assertEqual(document, DocumentSchema.validate(document))

    def test_invalid_documents(self):
        for document in (
                None,
                [],
                {},
                {"errors": [{"detail": "Not found."}]},
                {"data": "v8x57"},
                {"data": {"type": "nodes"}},
                {"data": {"type": "nodes", "id": ""}},
                {"data": [{"id": "v8x57"}]},
                {"data": {"type": "nodes", "id": "v8x57", "relationships": {"parent": []}}},
                {"data": {"type": "nodes", "id": "v8x57",
                          "relationships": {"parent": {"data": {"type": "nodes"}}}}},
                {"data": {"type": "nodes", "id": "v8x57", "links": {"self": 1}}},
                {"data": None, "included": {}}):
            with self.assertRaises(DeserializationError):
                DocumentSchema.validate(document)
