"""Resource registry: URI templates mapped to read-only handlers."""

import inspect
import re
from typing import Callable, Optional
from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..tools.results import ResourceResult

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def compile_template(uri_template: str) -> re.Pattern:
    """Compile ``scheme://a/{x}/b/{y}`` into an anchored regex.

    Each placeholder captures one path segment.
    """
    pattern = []
    position = 0
    for match in _PLACEHOLDER.finditer(uri_template):
        pattern.append(re.escape(uri_template[position:match.start()]))
        pattern.append(f"(?P<{match.group(1)}>[^/]+)")
        position = match.end()
    pattern.append(re.escape(uri_template[position:]))
    return re.compile("^" + "".join(pattern) + "$")


class Resource(BaseModel):
    """Definition of a resource addressed by a URI template."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    uri_template: str
    description: str = ""
    mime_type: str = "text/plain"
    handler: Optional[Callable] = Field(default=None, exclude=True)

    _pattern: Optional[re.Pattern] = PrivateAttr(default=None)

    @property
    def placeholders(self) -> list[str]:
        return _PLACEHOLDER.findall(self.uri_template)

    def match(self, uri: str) -> Optional[dict[str, str]]:
        """Extract placeholder values from a URI, or None if it does not match."""
        if self._pattern is None:
            self._pattern = compile_template(self.uri_template)
        found = self._pattern.match(uri)
        if found is None:
            return None
        return {name: unquote(value) for name, value in found.groupdict().items()}


class ResourceRegistry:
    """Registry for managing resources available to MCP clients."""

    def __init__(self):
        self._resources: dict[str, Resource] = {}

    def register(self, resource: Resource):
        """Register a resource."""
        self._resources[resource.name] = resource

    def get(self, name: str) -> Optional[Resource]:
        return self._resources.get(name)

    def list_resources(self) -> list[Resource]:
        return list(self._resources.values())

    def resolve(self, uri: str) -> Optional[tuple[Resource, dict[str, str]]]:
        """Find the first resource whose template matches the URI."""
        for resource in self._resources.values():
            params = resource.match(uri)
            if params is not None:
                return resource, params
        return None

    async def read(self, uri: str) -> ResourceResult:
        """Read a resource by URI."""
        resolved = self.resolve(uri)
        if resolved is None:
            raise ValueError(f"Unknown resource: {uri}")
        resource, params = resolved
        if not resource.handler:
            raise ValueError(f"Resource {resource.name} has no handler")

        if inspect.iscoroutinefunction(resource.handler):
            return await resource.handler(uri, **params)
        return resource.handler(uri, **params)
