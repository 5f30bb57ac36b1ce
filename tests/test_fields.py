from unittest import TestCase
from datetime import datetime

from osf_client.exceptions import DeserializationError
from osf_client import fields
from osf_client.models import File, Node, Registration, CATEGORIES
from osf_client.resource import Resource


class FieldsTestCase(TestCase):

    def test_nullable_schema(self):
        self.assertEqual({"type": ["string", "null"]}, File.schema.fields['checkout'].response)
        self.assertEqual({"type": ["integer", "null"], "minimum": 0}, File.schema.fields['size'].response)
        self.assertEqual({"type": ["object", "null"]}, Registration.schema.fields['registered_meta'].response)
        self.assertEqual({"type": "boolean"}, Node.schema.fields['public'].response)

    def test_nullable_enum_schema(self):
        category = Node.schema.fields['category']

        self.assertEqual(["string", "null"], category.response["type"])
        self.assertEqual(list(CATEGORIES) + [None], category.response["enum"])
        self.assertEqual("project", category.convert("project"))
        self.assertEqual(None, category.convert(None))

        with self.assertRaises(DeserializationError):
            category.convert("thesis")

    def test_enum_not_nullable(self):
        kind = File.schema.fields['kind']

        self.assertEqual({"type": "string", "enum": ["file", "folder"]}, kind.response)
        self.assertEqual("folder", kind.convert("folder"))

        with self.assertRaises(DeserializationError):
            kind.convert("symlink")

        with self.assertRaises(DeserializationError):
            kind.convert(None)

    def test_file_size(self):
        size = File.schema.fields['size']

        self.assertEqual(178240, size.convert(178240))
        self.assertEqual(None, size.convert(None))

        with self.assertRaises(DeserializationError):
            size.convert(-1)

        with self.assertRaises(DeserializationError):
            size.convert(1.5)

    def test_tags(self):
        tags = Node.schema.fields['tags']

        self.assertEqual({"type": "array", "items": {"type": "string"}}, tags.response)
        self.assertEqual(["moo", "cow"], tags.convert(["moo", "cow"]))
        self.assertEqual([], tags.convert([]))
        self.assertEqual(["moo"], tags.format(["moo"]))
        self.assertEqual(None, tags.format(None))

        with self.assertRaises(DeserializationError):
            tags.convert(["moo", 3])

        with self.assertRaises(DeserializationError):
            tags.convert(None)

    def test_permissions(self):
        permissions = Node.schema.fields['current_user_permissions']

        self.assertEqual(["read", "write", "admin"], permissions.convert(["read", "write", "admin"]))

        with self.assertRaises(DeserializationError):
            permissions.convert(["read", "own"])

    def test_date_time_string_convert(self):
        date_created = Node.schema.fields['date_created']

        self.assertEqual(datetime(2016, 4, 19, 13, 8, 24, 39000), date_created.convert('2016-04-19T13:08:24.039000'))
        self.assertEqual(None, date_created.convert(None))

    def test_date_time_string_convert_invalid(self):
        with self.assertRaises(DeserializationError):
            fields.DateTimeString().convert('19.04.2016')

        with self.assertRaises(DeserializationError):
            fields.DateTimeString().convert(1461071304)

    def test_date_time_string_format(self):
        self.assertEqual('2016-05-10T13:53:07.886000',
                         fields.DateTimeString().format(datetime(2016, 5, 10, 13, 53, 7, 886000)))

    def test_object(self):
        extra = File.schema.fields['extra']
        value = {"hashes": {"md5": "1d0ef6a4...", "sha256": None}, "downloads": 3}

        self.assertEqual(value, extra.convert(value))
        self.assertEqual(value, extra.format(value))
        self.assertEqual(None, extra.convert(None))

        with self.assertRaises(DeserializationError):
            extra.convert(["md5"])

    def test_array_of_non_field(self):
        with self.assertRaises(RuntimeError):
            fields.Array("string")


class RelationshipFieldsTestCase(TestCase):

    def test_strategy_and_cardinality(self):
        self.assertEqual((fields.REFERENCE, fields.ONE),
                         (fields.Reference('nodes').strategy, fields.Reference('nodes').cardinality))
        self.assertEqual((fields.REFERENCE, fields.MANY),
                         (fields.Reference(many=True).strategy, fields.Reference(many=True).cardinality))
        self.assertEqual((fields.OBJECT, fields.ONE),
                         (fields.ToOne('users').strategy, fields.ToOne('users').cardinality))
        self.assertEqual((fields.OBJECT, fields.MANY),
                         (fields.ToMany('files').strategy, fields.ToMany('files').cardinality))

    def test_empty(self):
        self.assertEqual([], fields.ToMany('files').empty())
        self.assertEqual(None, fields.ToOne('users').empty())
        self.assertEqual(None, fields.Reference('nodes').empty())

    def test_target_by_type_name(self):
        from osf_client.models import File, User

        self.assertEqual(File, fields.ToMany('files').target)
        self.assertEqual(User, fields.ToOne('users').target)
        self.assertEqual(User, fields.ToOne('osf_client.models.User').target)
        self.assertEqual(None, fields.Reference().target)

    def test_target_self(self):
        class Folder(Resource):
            class Schema:
                name = fields.String()
                files = fields.ToMany('self')

        self.assertEqual(Folder, Folder.meta.relationships['files'].target)

    def test_target_unknown(self):
        with self.assertRaises(RuntimeError):
            fields.ToOne('institutions').target

    def test_format(self):
        self.assertEqual('https://api.osf.io/v2/users/a3q2g/',
                         fields.Reference('users').format('https://api.osf.io/v2/users/a3q2g/'))
        self.assertEqual([], fields.ToMany('files').format([]))
        self.assertEqual(None, fields.ToOne('users').format(None))
