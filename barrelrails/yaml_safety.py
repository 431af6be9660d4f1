"""YAML loading for barrelrails.yaml and pubspec.yaml with a cap on aliases.

A few hundred bytes of nested anchors can expand into gigabytes, so every
alias reference is counted while the document is composed.
"""

import yaml

MAX_YAML_ALIASES = 100


class AliasLimitedLoader(yaml.SafeLoader):
    """SafeLoader that refuses documents with more than ``max_aliases`` aliases."""

    max_aliases = MAX_YAML_ALIASES

    def __init__(self, stream):
        super().__init__(stream)
        self.alias_count = 0

    def compose_node(self, parent, index):
        if self.check_event(yaml.AliasEvent):
            self.alias_count += 1
            if self.alias_count > self.max_aliases:
                raise yaml.YAMLError(f"YAML alias limit exceeded (max {self.max_aliases})")
        return super().compose_node(parent, index)


def safe_yaml_load(stream, max_aliases: int = MAX_YAML_ALIASES):
    """Parse one YAML document like yaml.safe_load, counting alias references."""
    loader = AliasLimitedLoader(stream)
    loader.max_aliases = max_aliases
    try:
        return loader.get_single_data()
    finally:
        loader.dispose()
