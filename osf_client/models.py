"""
Resource types of the OSF API v2.

Nodes and registrations share the fields declared in :class:`NodeFields`; each declares its own ``children``
relationship, typed to itself.
"""
from collections import OrderedDict

from osf_client import fields
from osf_client.resource import Resource

CATEGORIES = (
    '',
    'analysis',
    'communication',
    'data',
    'hypothesis',
    'instrumentation',
    'methods and measures',
    'procedure',
    'project',
    'software',
    'other',
)

PERMISSIONS = ('read', 'write', 'admin')

FILE_KINDS = ('file', 'folder')


class NodeFields(object):
    title = fields.String()
    description = fields.String(nullable=True)
    category = fields.String(enum=CATEGORIES, nullable=True)
    date_created = fields.DateTimeString(nullable=True)
    date_modified = fields.DateTimeString(nullable=True)
    fork = fields.Boolean()
    collection = fields.Boolean()
    registration = fields.Boolean()
    public = fields.Boolean()
    tags = fields.Array(fields.String())
    current_user_permissions = fields.Array(fields.String(enum=PERMISSIONS))

    root = fields.Reference('self')
    parent = fields.Reference('self')
    forked_from = fields.Reference('self')
    registrations = fields.Reference('registrations', many=True)
    node_links = fields.Reference(many=True)
    forks = fields.Reference('self', many=True)
    logs = fields.Reference(many=True)
    comments = fields.Reference(many=True)
    wikis = fields.Reference(many=True)

    contributors = fields.ToMany('contributors')
    files = fields.ToMany('files')


class Node(Resource):
    """
    A project or component.
    """

    class Schema(NodeFields):
        children = fields.ToMany('self')

    class Meta:
        type = 'nodes'


class Registration(Resource):
    """
    A frozen, citable copy of a node.
    """

    class Schema(NodeFields):
        children = fields.ToMany('self')

        date_registered = fields.DateTimeString(nullable=True)
        embargo_end_date = fields.DateTimeString(nullable=True)
        withdrawn = fields.Boolean()
        withdrawal_justification = fields.String(nullable=True)
        pending_withdrawal = fields.Boolean()
        pending_registration_approval = fields.Boolean()
        pending_embargo_approval = fields.Boolean()
        dashboard = fields.Boolean(nullable=True)
        registered_meta = fields.Object(nullable=True)
        registration_supplement = fields.String(nullable=True)

        registered_from = fields.Reference('nodes')
        registered_by = fields.Reference('users')

    class Meta:
        type = 'registrations'


class File(Resource):
    """
    A file or folder. The root folder of each storage backend attached to a node is a *storage provider*; its
    ``files`` relationship is resolved recursively, so one retrieval materializes the whole directory tree.
    """

    class Schema:
        name = fields.String()
        kind = fields.String(enum=FILE_KINDS)
        path = fields.String()
        materialized_path = fields.String(nullable=True)
        provider = fields.String()
        size = fields.Integer(minimum=0, nullable=True)
        date_created = fields.DateTimeString(nullable=True)
        date_modified = fields.DateTimeString(nullable=True)
        last_touched = fields.DateTimeString(nullable=True)
        current_version = fields.Integer(nullable=True)
        checkout = fields.String(nullable=True)
        tags = fields.Array(fields.String())
        extra = fields.Object(nullable=True)

        files = fields.ToMany('self')
        node = fields.Reference('nodes')
        versions = fields.Reference(many=True)
        comments = fields.Reference(many=True)

    class Meta:
        type = 'files'


class Contributor(Resource):

    class Schema:
        bibliographic = fields.Boolean()
        permission = fields.String(enum=PERMISSIONS)
        index = fields.Integer(minimum=0, nullable=True)
        unregistered_contributor = fields.String(nullable=True)

        users = fields.Reference('users')
        node = fields.Reference('nodes')

    class Meta:
        type = 'contributors'


class User(Resource):

    class Schema:
        full_name = fields.String()
        given_name = fields.String(nullable=True)
        middle_names = fields.String(nullable=True)
        family_name = fields.String(nullable=True)
        suffix = fields.String(nullable=True)
        date_registered = fields.DateTimeString(nullable=True)
        active = fields.Boolean(nullable=True)
        locale = fields.String(nullable=True)
        timezone = fields.String(nullable=True)

        nodes = fields.Reference('nodes', many=True)
        institutions = fields.Reference(many=True)

    class Meta:
        type = 'users'


RESOURCE_TYPES = OrderedDict((resource.meta.type, resource) for resource in (
    Node,
    Registration,
    File,
    Contributor,
    User,
))
