"""
Registry alias table.

An alias maps an import path prefix to a remote registry URL template, as in
components.json:

    "registries": {
        "@acme": "https://registry.acme.dev/{name}.json",
        "@private": {
            "url": "https://api.company.com/registry/{name}.json",
            "params": {"version": "latest"}
        }
    }

An import '@acme/button' then refers to https://registry.acme.dev/button.json.
"""

import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Pattern
from urllib.parse import quote_plus, urlencode

from ..errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

NAME_PLACEHOLDER = '{name}'


def _form_quote(string, safe='', encoding=None, errors=None) -> str:
    """application/x-www-form-urlencoded escaping: '*' stays literal, '~' is escaped."""
    return quote_plus(string, safe='*', encoding=encoding, errors=errors).replace('~', '%7E')


@dataclass(frozen=True)
class RegistryAlias:
    """One alias table entry with its compiled prefix matcher."""
    prefix: str
    url_template: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    pattern: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        normalized = unicodedata.normalize('NFKC', self.prefix)
        object.__setattr__(self, 'prefix', normalized)
        object.__setattr__(self, 'pattern', re.compile(f"^{re.escape(normalized)}(?:/|$)"))

    def matches(self, import_path: str) -> bool:
        return self.pattern.match(import_path) is not None

    def component_name(self, import_path: str) -> str:
        """Remainder of the import path after 'prefix/' (empty when nothing follows)."""
        return import_path[len(self.prefix) + 1:]

    def render_url(self, name: str) -> str:
        """Substitute the component name and append query parameters, if any."""
        url = self.url_template.replace(NAME_PLACEHOLDER, name, 1)
        if self.params:
            url += f"?{urlencode(self.params, quote_via=_form_quote)}"
        return url


class RegistryAliasTable:
    """Ordered collection of aliases; the first matching entry wins."""

    def __init__(self, aliases: Optional[List[RegistryAlias]] = None):
        self._aliases: List[RegistryAlias] = list(aliases or [])

    @classmethod
    def from_config(cls, registries: Optional[Mapping[str, Any]]) -> "RegistryAliasTable":
        """
        Build a table from a 'registries' configuration mapping.

        Args:
            registries: prefix -> URL template string, or prefix -> record with
                'url' and optional 'params' / 'headers'

        Raises:
            InvalidConfigurationError: If an entry has an unsupported shape
        """
        if isinstance(registries, RegistryAliasTable):
            return registries
        if not registries:
            return cls()
        if not isinstance(registries, Mapping):
            raise InvalidConfigurationError("'registries' must be an object mapping prefixes to URLs")

        aliases = []
        for prefix, value in registries.items():
            if isinstance(value, str):
                aliases.append(RegistryAlias(prefix=prefix, url_template=value))
            elif isinstance(value, Mapping) and isinstance(value.get('url'), str):
                aliases.append(RegistryAlias(
                    prefix=prefix,
                    url_template=value['url'],
                    params={str(k): str(v) for k, v in (value.get('params') or {}).items()},
                    headers={str(k): str(v) for k, v in (value.get('headers') or {}).items()},
                ))
            else:
                raise InvalidConfigurationError(
                    f"Registry alias {prefix!r} must be a URL string or an object with a 'url' field"
                )

        logger.debug(f"Loaded {len(aliases)} registry aliases")
        return cls(aliases)

    def resolve(self, import_path: str) -> Optional[str]:
        """
        Resolve an import path to a registry URL.

        Args:
            import_path: Normalized import path

        Returns:
            The rendered URL for the first alias whose prefix matches, or None.
            A matching prefix with nothing after it ends the search with None.
        """
        for alias in self._aliases:
            if not alias.matches(import_path):
                continue

            name = alias.component_name(import_path)
            if not name:
                return None
            return alias.render_url(name)

        return None
