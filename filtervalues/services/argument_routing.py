# filtervalues/services/argument_routing.py
import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from filtervalues.exceptions import (
    AmbiguousArgumentsError,
    DuplicateArgumentTargetError,
    InvalidParameterError,
    UnknownArgumentTargetError,
)

logger = logging.getLogger(__name__)

ArgumentBag = Mapping[str, Any]
PerMethodArguments = Union[
    Mapping[str, ArgumentBag], Iterable[Tuple[str, ArgumentBag]]
]


def _as_pairs(more_args: Optional[PerMethodArguments]) -> List[Tuple[str, ArgumentBag]]:
    if more_args is None:
        return []
    if isinstance(more_args, Mapping):
        return list(more_args.items())
    pairs = []
    for entry in more_args:
        try:
            name, bag = entry
        except (TypeError, ValueError):
            raise InvalidParameterError(
                f"Per-method arguments must be (method, arguments) pairs, got {entry!r}."
            )
        pairs.append((name, bag))
    return pairs


def route_arguments(
    methods: Sequence[str],
    args: Optional[ArgumentBag] = None,
    more_args: Optional[PerMethodArguments] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Resolves extra arguments into one argument bag per requested method.

    ``args`` is a single bag shared with the only requested method; it cannot be
    combined with ``more_args`` nor used with several methods. ``more_args``
    maps method names to their bags, either as a mapping or as (name, bag)
    pairs. Methods without an entry get an empty bag.
    """
    pairs = _as_pairs(more_args)

    if args and pairs:
        logger.error("Both shared and per-method filter arguments were supplied.")
        raise AmbiguousArgumentsError("Do not use both 'more_args' and 'args' here!")

    if args:
        if len(methods) != 1:
            logger.error(f"Shared filter arguments supplied for {len(methods)} methods.")
            raise AmbiguousArgumentsError(
                "You use more than 1 filter method. Please pass extra arguments "
                "via 'more_args' and not 'args' to filter methods!"
            )
        return {methods[0]: dict(args)}

    duplicates = [name for name, count in Counter(name for name, _ in pairs).items() if count > 1]
    if duplicates:
        raise DuplicateArgumentTargetError(
            f"Per-method arguments given more than once for: {', '.join(duplicates)}"
        )

    unknown = [name for name, _ in pairs if name not in methods]
    if unknown:
        raise UnknownArgumentTargetError(
            f"Per-method arguments given for methods that were not requested: "
            f"{', '.join(unknown)}"
        )

    routed: Dict[str, Dict[str, Any]] = {}
    for name, bag in pairs:
        if not isinstance(bag, Mapping):
            raise InvalidParameterError(
                f"Arguments for filter method '{name}' must be a mapping, got {type(bag).__name__}."
            )
        routed[name] = dict(bag)
    return routed
