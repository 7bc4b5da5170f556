import logging
import random
from typing import List, Optional

from .errors import CodeGenerationError
from .models import Group
from .storage import GROUPS_KEY, JsonStore, read_models, write_models

logger = logging.getLogger(__name__)

CODE_MIN = 10000
CODE_MAX = 99999
DEFAULT_CODE_ATTEMPTS = 1000


class GroupRegistry:
    def __init__(self, store: JsonStore, rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng or random.Random()

    def list_all(self) -> List[Group]:
        return read_models(self.store, GROUPS_KEY, Group)

    def find_by_code(self, code: str) -> Optional[Group]:
        return next((g for g in self.list_all() if g.code == code), None)

    def create(self, group: Group):
        """Append ``group``. The code is trusted to come from generate_code()."""
        groups = self.list_all()
        groups.append(group)
        write_models(self.store, GROUPS_KEY, groups)
        logger.info(f"Created group {group.name!r} with code {group.code}")

    def generate_code(self, max_attempts: int = DEFAULT_CODE_ATTEMPTS) -> str:
        """
        Draw a five digit code that no existing group uses.

        Raises:
            CodeGenerationError: if every draw within ``max_attempts``
                collided with an existing code.
        """
        taken = {g.code for g in self.list_all()}
        for _ in range(max_attempts):
            code = str(self.rng.randint(CODE_MIN, CODE_MAX))
            if code not in taken:
                return code
        raise CodeGenerationError(max_attempts)
