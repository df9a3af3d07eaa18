import logging
import random
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, TypeVar

from .config import settings
from .exceptions import ConfigurationError
from .models import Pair, Question

logger = logging.getLogger("kanaquiz.generator")

T = TypeVar("T")

# Returns a float in [0, 1).
RandomSource = Callable[[], float]


# --- Sampling Helpers ---
def _pick(uniform: RandomSource, upper: int) -> int:
    """Uniform index in [0, upper)."""
    return min(int(uniform() * upper), upper - 1)


def shuffled(items: Sequence[T], uniform: RandomSource = random.random) -> List[T]:
    """Returns a uniformly random permutation of ``items`` (Fisher-Yates)."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = _pick(uniform, i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def sample(
    items: Sequence[T], n: int, uniform: RandomSource = random.random
) -> List[T]:
    """Draws ``n`` distinct elements without replacement, in draw order."""
    if n > len(items):
        raise ValueError(f"Cannot draw {n} items from {len(items)}")
    pool = list(items)
    for i in range(n):
        j = i + _pick(uniform, len(pool) - i)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:n]


# --- Strategy Pattern: Quiz Generators ---
class QuizGenerator(ABC):
    """Abstract Base Class for question batch generation strategies."""

    def __init__(
        self,
        pairs: Sequence[Pair],
        batch_size: int,
        uniform: RandomSource = random.random,
        option_count: int = settings.OPTION_COUNT,
    ):
        self.pairs = list(pairs)
        self.batch_size = batch_size
        self.uniform = uniform
        self.option_count = option_count
        self._validate()

    def _validate(self):
        if not self.pairs:
            raise ConfigurationError("Pair table is empty.")
        if self.batch_size < 1:
            raise ConfigurationError(f"Batch size must be positive, got {self.batch_size}.")
        if self.batch_size > len(self.pairs):
            raise ConfigurationError(
                f"Batch size {self.batch_size} exceeds table size {len(self.pairs)}."
            )
        distinct = {p.translation for p in self.pairs}
        if len(distinct) < self.option_count:
            raise ConfigurationError(
                f"Table has {len(distinct)} distinct translations; "
                f"{self.option_count} are needed for every question."
            )

    @abstractmethod
    def generate(self) -> List[Question]:
        pass

    def _distractor_pool(self, correct_translation: str) -> List[str]:
        seen = {correct_translation}
        pool = []
        for pair in self.pairs:
            if pair.translation not in seen:
                seen.add(pair.translation)
                pool.append(pair.translation)
        return pool

    def _generate_options(self, correct_translation: str) -> List[str]:
        """Correct translation plus random distractors, shuffled."""
        incorrect = sample(
            self._distractor_pool(correct_translation),
            self.option_count - 1,
            self.uniform,
        )
        return shuffled([correct_translation] + incorrect, self.uniform)


class RandomQuizGenerator(QuizGenerator):
    """Standard mode: randomly selects ``batch_size`` pairs from the table."""

    def generate(self) -> List[Question]:
        selected = sample(self.pairs, self.batch_size, self.uniform)
        return [
            Question(
                id=idx,
                prompt=pair.symbol,
                options=self._generate_options(pair.translation),
                correct_answer=pair.translation,
            )
            for idx, pair in enumerate(selected)
        ]


class QuizFactory:
    """Factory to select the appropriate generator."""

    @staticmethod
    def create(
        strategy: str,
        pairs: Sequence[Pair],
        batch_size: int = settings.BATCH_SIZE,
        uniform: Optional[RandomSource] = None,
    ) -> QuizGenerator:
        if strategy != "random":
            logger.warning(f"Unknown strategy '{strategy}', using random.")
        return RandomQuizGenerator(pairs, batch_size, uniform or random.random)


def generate(
    pairs: Sequence[Pair], batch_size: int, uniform: RandomSource = random.random
) -> List[Question]:
    return RandomQuizGenerator(pairs, batch_size, uniform).generate()
