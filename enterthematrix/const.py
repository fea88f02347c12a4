import re

# Names look like "/<project>_<8 lowercase hex>"
NAME_PATTERN = re.compile(r'^.*_[0-9a-f]{8}\Z', re.DOTALL)
SHELL_COMMAND = ['/bin/bash']

RESIZE_SETTLE_DELAY = 0.1
STREAM_CHUNK_SIZE = 4096

DEFAULT_API_VERSION = '1.30'

API_VERSION_TO_ENGINE_VERSION = {
    DEFAULT_API_VERSION: '17.06.0',
}
