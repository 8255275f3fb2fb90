from tests.fixtures.core import *  # noqa: F401,F403
from tests.fixtures.platform import *  # noqa: F401,F403
from tests.fixtures.services import *  # noqa: F401,F403
