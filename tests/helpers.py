import contextlib
import os


def container_dict(container_id, names, state='running', status='Up 5 minutes'):
    return {
        'Id': container_id,
        'Image': 'busybox',
        'Command': '/bin/sh',
        'Names': names,
        'State': state,
        'Status': status,
    }


def pipe():
    """Return the (reader, writer) ends of a new pipe as unbuffered files."""
    r, w = os.pipe()
    return os.fdopen(r, 'rb', buffering=0), os.fdopen(w, 'wb', buffering=0)


def close_quietly(*files):
    for f in files:
        with contextlib.suppress(OSError):
            f.close()
