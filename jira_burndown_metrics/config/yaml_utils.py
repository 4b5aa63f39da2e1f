"""YAML utilities for configuration processing.

Mappings are loaded as case-insensitive ordered dicts, so `Output`,
`output` and `OUTPUT` all name the same section.
"""

import yaml
from pydicti import odicti


def ordered_load(stream, loader=yaml.SafeLoader, object_pairs_hook=odicti):
    """
    Load YAML mappings as ordered, case-insensitive dictionaries.
    """

    def construct_mapping(loader, node):
        loader.flatten_mapping(node)
        return object_pairs_hook(loader.construct_pairs(node))

    # Subclass so the constructor is not registered on the shared loader
    OrderedLoader = type(
        "OrderedLoader",
        (loader,),
        {"yaml_constructors": dict(loader.yaml_constructors)},
    )
    OrderedLoader.add_constructor(
        yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, construct_mapping
    )

    return yaml.load(stream, OrderedLoader)
