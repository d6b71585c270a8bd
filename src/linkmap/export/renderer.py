"""Export bundle builder and JSON renderer."""

from __future__ import annotations

from linkmap.core.types import GROUP_KEYS
from linkmap.export.models import ExportBundle, ExportRow
from linkmap.graph.markers import LABEL_SEPARATOR
from linkmap.graph.models import ResolvedResult


def build_export_bundle(result: ResolvedResult) -> ExportBundle:
    """Flatten a resolved result into per-type lists.

    Field formatting is left to the document generator; rows only carry
    the entity, its tier, and a readable chain of intermediates.
    """
    labels = {result.seed.ref: result.seed.label}
    labels.update({entry.ref: entry.entity.label for entry in result.entries})

    bundle = ExportBundle(seed=result.seed, partial=result.is_partial)
    for entry in result.entries:
        via_label = LABEL_SEPARATOR.join(
            labels.get(ref, str(ref)) for ref in entry.provenance
        )
        getattr(bundle, GROUP_KEYS[entry.ref.entity_type]).append(
            ExportRow(entity=entry.entity, tier=entry.tier, via_label=via_label)
        )
    return bundle


class ExportRenderer:
    """Renders export bundles for the document layer."""

    def render_json(self, bundle: ExportBundle) -> str:
        return bundle.model_dump_json(indent=2)
