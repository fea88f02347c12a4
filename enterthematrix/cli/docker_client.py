import logging

from docker import APIClient
from docker import Context
from docker import ContextAPI
from docker.errors import TLSParameterError
from docker.utils import kwargs_from_env

from . import verbose_proxy
from ..const import DEFAULT_API_VERSION
from .errors import UserError
from .utils import generate_user_agent
from .utils import get_version_info

log = logging.getLogger(__name__)


def get_client(environment, verbose=False):
    client = docker_client(environment)
    if verbose:
        log.info(get_version_info('full'))
        log.info("Docker base_url: %s", client.base_url)
        log.info("Docker API version: %s", client.api_version)
        return verbose_proxy.VerboseProxy('docker', client)
    return client


def docker_client(environment):
    """
    Returns a docker-py client configured using environment variables
    according to the same logic as the official Docker client.

    No request is made to the engine here.
    """
    try:
        kwargs = kwargs_from_env(environment=environment)
    except TLSParameterError:
        raise UserError(
            "TLS configuration is invalid - make sure your DOCKER_TLS_VERIFY "
            "and DOCKER_CERT_PATH are set correctly.")

    host = kwargs.get("base_url", None)
    tls = kwargs.get("tls", None)
    if host:
        verify = False if not tls else tls.verify
        context = Context("enterthematrix", host=host, tls=verify)
        if tls:
            context.set_endpoint("docker", host=host, tls_cfg=tls, skip_tls_verify=not verify)
    else:
        # follow `docker context use`
        context = ContextAPI.get_current_context()

    if not context.is_docker_host():
        raise UserError(
            "The platform targeted with the current context is not supported.\n"
            "Make sure the context in use targets a Docker Engine.\n")

    kwargs['base_url'] = context.Host
    if context.TLSConfig:
        kwargs['tls'] = context.TLSConfig

    kwargs['version'] = environment.get('DOCKER_API_VERSION') or DEFAULT_API_VERSION

    try:
        kwargs['timeout'] = environment.get_int('ENTERTHEMATRIX_HTTP_TIMEOUT')
    except ValueError as e:
        raise UserError(str(e))

    kwargs['user_agent'] = generate_user_agent()

    return APIClient(**kwargs)
