"""
Request representation consumed by the signer.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

Parameters = List[Tuple[str, Optional[str]]]


@dataclass
class SignableRequest:
    """
    An outbound request awaiting a signature.

    ``headers`` is mutated in place by the signer. ``parameters`` holds
    ``(name, value)`` pairs so a name may carry several values; a mapping is
    accepted on construction and converted.
    """
    endpoint: str
    http_method: str = "GET"
    resource_path: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    parameters: Parameters = field(default_factory=list)
    content: bytes = b""
    time_offset: int = 0

    def __post_init__(self):
        self.parameters = as_parameter_pairs(self.parameters)
        if self.content is None:
            self.content = b""
        elif isinstance(self.content, str):
            self.content = self.content.encode('utf-8')

    def add_header(self, name: str, value: str) -> None:
        """Set a header, replacing any existing header with the same name in another case."""
        self.remove_header(name)
        self.headers[name] = value

    def remove_header(self, name: str) -> None:
        lname = name.lower()
        for key in [k for k in self.headers if k.lower() == lname]:
            del self.headers[key]

    def get_header(self, name: str) -> Optional[str]:
        lname = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lname:
                return value
        return None

    def add_parameter(self, name: str, value: Optional[str]) -> None:
        self.parameters.append((name, value))


def as_parameter_pairs(parameters: Union[Mapping, Iterable, None]) -> Parameters:
    if parameters is None:
        return []
    if isinstance(parameters, Mapping):
        pairs = []
        for name, value in parameters.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((name, v) for v in value)
            else:
                pairs.append((name, value))
        return pairs
    return [(name, value) for name, value in parameters]
