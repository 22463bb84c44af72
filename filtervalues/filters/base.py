# filtervalues/filters/base.py

import logging
from abc import ABC, abstractmethod
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from filtervalues.exceptions import UnknownMethodError
from filtervalues.schemas.enums import FeatureKindEnum, TaskTypeEnum
from filtervalues.schemas.filter_method import (
    FilterMethodDefinition,
    FilterParamDefinition,
)

logger = logging.getLogger(__name__)

ScoreFunction = Callable[..., Mapping[str, float]]


class FilterMethod(ABC):
    """
    Abstract Base Class for a feature filter method (Strategy Pattern).
    All concrete filter methods must inherit from this class.
    """

    # --- Metadata to be overridden by subclasses ---
    name: str = "base_filter"
    display_name: str = "Base Filter"
    description: str = "Base description for a feature filter method."
    supported_tasks: FrozenSet[TaskTypeEnum] = frozenset()
    supported_features: FrozenSet[FeatureKindEnum] = frozenset()
    required_packages: Tuple[str, ...] = ()
    parameters: List[FilterParamDefinition] = []
    # --- End Metadata ---

    def get_definition(self) -> FilterMethodDefinition:
        """Returns the Pydantic model definition of the method."""
        return FilterMethodDefinition(
            name=self.name,
            display_name=self.display_name,
            description=self.description,
            supported_tasks=sorted(self.supported_tasks, key=lambda t: t.value),
            supported_features=sorted(self.supported_features, key=lambda k: k.value),
            required_packages=list(self.required_packages),
            parameters=self.parameters,
        )

    @abstractmethod
    def score_features(self, task, n_select: int, **params: Any) -> Mapping[str, float]:
        """
        Scores the features of a task.

        Args:
            task: The task snapshot. Must not be mutated.
            n_select: Number of scores requested. Methods that cannot truncate
                internally may ignore it.
            **params: Method-specific extra arguments.

        Returns:
            Mapping[str, float]: Feature name to score. May cover only a subset
            of the task's features.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class FunctionFilterMethod(FilterMethod):
    """Adapts a plain scoring function with declared metadata to the FilterMethod interface."""

    def __init__(
        self,
        name: str,
        supported_tasks: Iterable[TaskTypeEnum],
        supported_features: Iterable[FeatureKindEnum],
        score_fn: ScoreFunction,
        required_packages: Sequence[str] = (),
        display_name: Optional[str] = None,
        description: str = "",
    ):
        self.name = name
        self.display_name = display_name or name
        self.description = description or f"Filter method '{name}'."
        self.supported_tasks = frozenset(TaskTypeEnum(t) for t in supported_tasks)
        self.supported_features = frozenset(
            FeatureKindEnum(k) for k in supported_features
        )
        self.required_packages = tuple(required_packages)
        self.parameters = []
        self._score_fn = score_fn

    def score_features(self, task, n_select: int, **params: Any) -> Mapping[str, float]:
        return self._score_fn(task, n_select, **params)


class RegistryLockedError(RuntimeError):
    """Raised when registering a filter method after the registry has been locked."""


class FilterRegistry:
    """
    Registry of filter methods keyed by name.
    Populated once at startup and read-only while filter values are computed.
    """

    def __init__(self, methods: Iterable[FilterMethod] = ()):
        self._methods: Dict[str, FilterMethod] = {}
        self._locked = False
        for method in methods:
            self.register(method)

    def register(self, method: FilterMethod) -> FilterMethod:
        """Registers a filter method instance under its name."""
        if not isinstance(method, FilterMethod):
            raise TypeError("Provided object is not a FilterMethod")
        if self._locked:
            raise RegistryLockedError(
                f"Cannot register filter '{method.name}': registry is locked."
            )
        if method.name in self._methods:
            logger.warning(
                f"Filter name '{method.name}' already registered. Overwriting."
            )
        self._methods[method.name] = method
        logger.debug(f"Registered filter method: {method.name}")
        return method

    def register_function(
        self,
        name: str,
        supported_tasks: Iterable[TaskTypeEnum],
        supported_features: Iterable[FeatureKindEnum],
        required_packages: Sequence[str],
        score_fn: ScoreFunction,
    ) -> FilterMethod:
        return self.register(
            FunctionFilterMethod(
                name=name,
                supported_tasks=supported_tasks,
                supported_features=supported_features,
                score_fn=score_fn,
                required_packages=required_packages,
            )
        )

    def lock(self) -> None:
        """Forbids further registration."""
        self._locked = True

    @property
    def locked(self) -> bool:
        return self._locked

    def get(self, name: str) -> FilterMethod:
        """Retrieves a registered filter method by name."""
        method = self._methods.get(name)
        if method is None:
            logger.error(f"Filter method '{name}' not found in registry.")
            raise UnknownMethodError(f"Filter method '{name}' not found.", [name])
        return method

    def names(self) -> List[str]:
        return list(self._methods)

    def list_definitions(self, task=None) -> List[FilterMethodDefinition]:
        """
        Returns the definitions of all registered methods, ordered by name.
        With a task, only methods supporting its type and every feature kind
        present in it are listed.
        """
        methods = sorted(self._methods.values(), key=lambda m: m.name)
        if task is not None:
            present = {k for k, n in task.feature_counts().items() if n > 0}
            methods = [
                m
                for m in methods
                if task.task_type in m.supported_tasks
                and present <= set(m.supported_features)
            ]
        return [m.get_definition() for m in methods]

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __len__(self) -> int:
        return len(self._methods)
