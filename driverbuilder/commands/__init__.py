from .build import build
from .config import config
from .log import log
from .targets import targets
from .version import version
