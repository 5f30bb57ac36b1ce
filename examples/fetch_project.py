import logging
import sys

from osf_client import Client
from osf_client.signals import relationship_failed


def print_tree(files, depth=1):
    for item in files or ():
        size = '' if item.size is None else ' ({} bytes)'.format(item.size)
        print('{}{}{}'.format('  ' * depth, item.name, size))
        print_tree(item.files, depth + 1)


def warn(sender, item, name, failure):
    print('! could not resolve {} of {}: {}'.format(name, item, failure), file=sys.stderr)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    relationship_failed.connect(warn)

    client = Client.from_env()
    project = client.node(sys.argv[1])

    print('{} [{}]'.format(project.title, project.category))

    for contributor in project.contributors or ():
        print('- {} ({})'.format(contributor.users, contributor.permission))

    for component in project.children or ():
        print('+ {} {}'.format(component.id, component.title))

    for provider in project.files or ():
        print(provider.name)
        print_tree(provider.files)
