import logging

from docker.errors import APIError

from .const import NAME_PATTERN
from .errors import ListError
from .errors import NoCandidatesError
from .utils import explain

log = logging.getLogger(__name__)


def matches_naming_convention(name, pattern=NAME_PATTERN):
    return pattern.match(name) is not None


class Container:
    """
    Represents a Docker container, constructed from one entry of the output
    of GET /containers/json.
    """
    def __init__(self, client, dictionary):
        self.client = client
        self.dictionary = dictionary

    @classmethod
    def from_ps(cls, client, dictionary):
        return cls(client, dictionary)

    @property
    def id(self):
        return self.dictionary['Id']

    @property
    def short_id(self):
        return self.id[:12]

    @property
    def names(self):
        return list(self.dictionary.get('Names') or [])

    @property
    def name(self):
        names = self.names
        if not names:
            return self.short_id
        return names[0].lstrip('/')

    @property
    def state(self):
        return self.dictionary.get('State')

    @property
    def status(self):
        return self.dictionary.get('Status', '')

    def __repr__(self):
        return '<Container: {} ({})>'.format(self.name, self.short_id)

    def __eq__(self, other):
        if type(self) != type(other):
            return False
        return self.id == other.id

    def __hash__(self):
        return self.id.__hash__()


class ContainerCatalog:
    """Running containers on the engine behind `client`."""

    def __init__(self, client):
        self.client = client

    def list(self):
        try:
            response = self.client.containers()
        except APIError as e:
            raise ListError("Failed to list containers: {}".format(explain(e)))

        return [Container.from_ps(self.client, d) for d in response]

    @staticmethod
    def filter(containers, pattern=NAME_PATTERN):
        """
        Keep the containers that have exactly one name and whose name follows
        the naming convention, in their original order.

        Raises NoCandidatesError if nothing is left.
        """
        candidates = []
        for container in containers:
            if len(container.names) != 1:
                log.debug("Skipping %s: it has %d names", container.short_id, len(container.names))
                continue
            if not matches_naming_convention(container.names[0], pattern):
                log.debug("Skipping %s: name does not match", container.name)
                continue
            candidates.append(container)

        if not candidates:
            raise NoCandidatesError()
        return candidates
