import socket

import pytest
from docker.errors import APIError
from requests.exceptions import ConnectionError
from requests.exceptions import ReadTimeout
from requests.exceptions import SSLError

from enterthematrix.cli import errors
from enterthematrix.cli.errors import handle_connection_errors
from enterthematrix.cli.errors import UserError
from tests import mock


@pytest.fixture
def mock_logging():
    with mock.patch('enterthematrix.cli.errors.log', autospec=True) as mock_log:
        yield mock_log


def patch_which(side_effect):
    return mock.patch(
        'enterthematrix.cli.errors.shutil.which',
        autospec=True,
        side_effect=side_effect)


class TestUserError:

    def test_message_is_dedented(self):
        error = UserError("""
            No server selected.
        """)
        assert error.msg == "No server selected."
        assert str(error) == "No server selected."


class TestHandleConnectionErrors:

    def test_generic_connection_error(self, mock_logging):
        with pytest.raises(errors.ConnectionError):
            with patch_which(['/bin/docker']):
                with mock.patch('enterthematrix.cli.errors.is_docker_for_mac_installed',
                                return_value=False):
                    with handle_connection_errors(mock.Mock(base_url='http+docker://localhost')):
                        raise ConnectionError()

        _, args, _ = mock_logging.error.mock_calls[0]
        assert "Couldn't connect to Docker daemon at http+docker://localhost" in args[0]

    def test_docker_not_installed(self, mock_logging):
        with pytest.raises(errors.ConnectionError):
            with patch_which([None]):
                with handle_connection_errors(mock.Mock()):
                    raise ConnectionError()

        _, args, _ = mock_logging.error.mock_calls[0]
        assert "You might need to install Docker" in args[0]

    def test_docker_for_mac_not_started(self, mock_logging):
        with pytest.raises(errors.ConnectionError):
            with patch_which(['/usr/local/bin/docker']):
                with mock.patch('enterthematrix.cli.errors.is_docker_for_mac_installed',
                                return_value=True):
                    with handle_connection_errors(mock.Mock()):
                        raise ConnectionError()

        _, args, _ = mock_logging.error.mock_calls[0]
        assert "start Docker for Mac" in args[0]

    def test_ssl_error(self, mock_logging):
        with pytest.raises(errors.ConnectionError):
            with handle_connection_errors(mock.Mock()):
                raise SSLError("certificate verify failed")

        _, args, _ = mock_logging.error.mock_calls[0]
        assert args[0].startswith("SSL error: ")

    def test_api_error_version_mismatch(self, mock_logging):
        with pytest.raises(errors.ConnectionError):
            with handle_connection_errors(mock.Mock(api_version='1.30')):
                raise APIError(None, None, b"client is newer than server")

        _, args, _ = mock_logging.error.mock_calls[0]
        assert "Docker Engine of version 17.06.0 or greater" in args[0]

    def test_api_error_version_mismatch_custom_version(self, mock_logging):
        with pytest.raises(errors.ConnectionError):
            with handle_connection_errors(mock.Mock(api_version='1.45')):
                raise APIError(None, None, "client is newer than server")

        mock_logging.error.assert_called_once_with("client is newer than server")

    def test_api_error_version_other(self, mock_logging):
        msg = b"Something broke!"
        with pytest.raises(errors.ConnectionError):
            with handle_connection_errors(mock.Mock(api_version='1.30')):
                raise APIError(None, None, msg)

        mock_logging.error.assert_called_once_with(msg.decode('utf-8'))

    def test_api_error_version_other_unicode_explanation(self, mock_logging):
        msg = "Something broke!"
        with pytest.raises(errors.ConnectionError):
            with handle_connection_errors(mock.Mock(api_version='1.30')):
                raise APIError(None, None, msg)

        mock_logging.error.assert_called_once_with(msg)

    @pytest.mark.parametrize('error', [ReadTimeout(), socket.timeout()])
    def test_timeout(self, mock_logging, error):
        with pytest.raises(errors.ConnectionError):
            with handle_connection_errors(mock.Mock(timeout=60)):
                raise error

        _, args, _ = mock_logging.error.mock_calls[0]
        assert "current value: 60" in args[0]

    def test_other_errors_pass_through(self, mock_logging):
        with pytest.raises(UserError):
            with handle_connection_errors(mock.Mock()):
                raise UserError("No server selected.")

        assert not mock_logging.error.called
