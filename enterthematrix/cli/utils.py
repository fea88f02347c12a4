import os
import platform
import ssl
import sys

import distro
import docker

import enterthematrix


def input(prompt):
    """
    Version of input which forces a flush of sys.stdout to avoid problems
    where the prompt fails to appear due to line buffering.

    Raises EOFError when stdin is exhausted.
    """
    sys.stdout.write(prompt)
    sys.stdout.flush()
    line = sys.stdin.readline()
    if not line:
        raise EOFError()
    return line.rstrip('\n')


def is_mac():
    return platform.system() == 'Darwin'


def is_ubuntu():
    return platform.system() == 'Linux' and distro.id() == 'ubuntu'


def is_docker_for_mac_installed():
    return is_mac() and os.path.isdir('/Applications/Docker.app')


def get_version_info(scope):
    versioninfo = 'enterthematrix version {}'.format(enterthematrix.__version__)

    if scope == 'short':
        return versioninfo
    if scope == 'full':
        return (
            "{}\n"
            "docker-py version: {}\n"
            "{} version: {}\n"
            "OpenSSL version: {}"
        ).format(
            versioninfo,
            docker.__version__,
            platform.python_implementation(),
            platform.python_version(),
            ssl.OPENSSL_VERSION)

    raise ValueError("{} is not a valid version scope".format(scope))


def generate_user_agent():
    parts = [
        "enterthematrix/{}".format(enterthematrix.__version__),
        "docker-py/{}".format(docker.__version__),
    ]
    try:
        p_system = platform.system()
        p_release = platform.release()
    except IOError:
        pass
    else:
        parts.append("{}/{}".format(p_system, p_release))
    return " ".join(parts)
