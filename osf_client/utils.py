from urllib.parse import urljoin


class AttributeDict(dict):
    __getattr__ = dict.__getitem__
    __setattr__ = dict.__setitem__


def link_href(link):
    """
    Returns the URL of a JSON-API link, which is either a string or a link object with an ``href`` member.
    """
    if isinstance(link, dict):
        return link.get('href')
    return link


def relationship_url(relationship):
    """
    The URL a relationship object points to: ``links.related`` or, failing that, ``links.self``.

    :return: a URL or ``None`` if the relationship has no links
    """
    links = relationship.get('links') or {}
    for name in ('related', 'self'):
        href = link_href(links.get(name))
        if href:
            return href
    return None


def join_uri(base, *parts):
    """
    Joins path segments onto a base URI, keeping the trailing slash the OSF API expects.

    >>> join_uri('https://api.osf.io/v2/', 'nodes', 'v8x57')
    'https://api.osf.io/v2/nodes/v8x57/'
    """
    if not base.endswith('/'):
        base += '/'
    path = '/'.join(str(part).strip('/') for part in parts if part)
    if not path:
        return base
    return urljoin(base, path + '/')
