"""
Type definitions for rest_helper.
"""
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Literal, Tuple, Union

if TYPE_CHECKING:
    from .config import HelperConfig, TimeoutConfig
    from .core.request import Request


# Verbs with wrappers on Helper. Any other method token is accepted as str.
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

# Header and query storage: ordered name/value pairs, duplicates allowed.
HeaderPairs = List[Tuple[str, str]]
QueryPairs = List[Tuple[str, str]]

# Raw request body sources accepted by with_body.
BodySource = Union[bytes, str, Iterable[bytes], Any]

# Seconds, or per-phase timeouts.
TimeoutValue = Union[float, int, "TimeoutConfig"]

# Options are plain callables applied in order.
HelperOption = Callable[["HelperConfig"], None]
RequestOption = Callable[["Request"], None]

# Custom parser callables receive the raw response body.
ParserFunc = Callable[[bytes], Any]
