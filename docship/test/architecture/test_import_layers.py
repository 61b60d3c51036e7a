from __future__ import annotations

import pytest

from ._gate import require_arch_checks_enabled
from ._utils import iter_source_files, matches_prefix, package_root, parse_imports

# Lower layers never reach up into the task runner or the CLI.
_FORBIDDEN: dict[str, tuple[str, ...]] = {
    "core": ("docship.platform", "docship.adapters", "docship.tasks", "docship.cli"),
    "platform": ("docship.adapters", "docship.tasks", "docship.cli"),
    "release": ("docship.adapters", "docship.tasks", "docship.cli"),
    "adapters": ("docship.tasks", "docship.cli"),
    "tasks": ("docship.cli",),
}


@pytest.mark.parametrize("layer", sorted(_FORBIDDEN))
def test_layer_does_not_import_upper_layers(layer: str) -> None:
    require_arch_checks_enabled()

    root = package_root()
    offenders: list[str] = []
    for file_path in iter_source_files():
        rel = file_path.relative_to(root)
        if rel.parts[0] != layer:
            continue
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in _FORBIDDEN[layer]):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, f"{layer} layering violations:\n" + "\n".join(offenders)
