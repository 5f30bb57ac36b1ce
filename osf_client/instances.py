from osf_client.utils import link_href


class ResourceList(list):
    """
    One page of resources from a list endpoint.

    The navigation links are exposed exactly as the service returned them. The OSF API omits ``first`` and ``prev``
    on the first page and ``last`` on the last page; those attributes are ``None`` there.

    :param items: resources on this page, in document order
    :param dict links: the top-level ``links`` member of the document
    :param dict meta: the top-level ``meta`` member of the document
    """

    def __init__(self, items=(), links=None, meta=None):
        super(ResourceList, self).__init__(items)
        self.links = links or {}
        self.meta = meta

    def _link(self, name):
        return link_href(self.links.get(name))

    def size(self):
        return len(self)

    @property
    def self_link(self):
        return self._link('self')

    @property
    def first(self):
        return self._link('first')

    @property
    def prev(self):
        return self._link('prev')

    previous = prev

    @property
    def next(self):
        return self._link('next')

    @property
    def last(self):
        return self._link('last')

    @property
    def total(self):
        meta = self.meta or self.links.get('meta') or {}
        return meta.get('total')

    def __repr__(self):
        return '<ResourceList size={} next={!r}>'.format(len(self), self.next)
