import logging
import os

import dotenv

log = logging.getLogger(__name__)


def env_vars_from_file(filename):
    """
    Read in a line delimited file of environment variables.

    Returns an empty dict when the file does not exist.
    """
    if not os.path.isfile(filename):
        return {}

    log.debug("Reading environment from %s", filename)
    env = dotenv.dotenv_values(dotenv_path=filename, encoding='utf-8-sig')
    return {k: v for k, v in env.items() if v is not None}


class Environment(dict):
    """Process environment overlaid on the values of an optional .env file."""

    @classmethod
    def from_env_file(cls, base_dir, env_file='.env'):
        instance = cls()
        if base_dir is not None:
            instance.update(env_vars_from_file(os.path.join(base_dir, env_file)))
        instance.update(os.environ)
        return instance

    def get_boolean(self, key, default=False):
        # Unset, empty, "0" and "false" (i-case) yield False.
        # All other values yield True.
        value = self.get(key)
        if not value:
            return default
        if value.lower() in ['0', 'false']:
            return False
        return True

    def get_int(self, key, default=None):
        value = self.get(key)
        if not value:
            return default
        try:
            return int(value)
        except ValueError:
            raise ValueError(
                "{} must be an integer, got {!r}".format(key, value)
            )
