from threading import Thread

from docker.errors import APIError


def binarystr_to_unicode(s):
    if not isinstance(s, bytes):
        return s
    return s.decode('utf-8', 'replace')


def explain(error):
    """Human readable description of an error raised by the Docker client."""
    if isinstance(error, APIError) and error.explanation:
        return binarystr_to_unicode(error.explanation)
    return str(error)


def start_background_thread(**kwargs):
    thread = Thread(**kwargs)
    thread.daemon = True
    thread.start()
    return thread
