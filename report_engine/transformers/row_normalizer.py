# ==============================================
# report_engine/transformers/row_normalizer.py
# ==============================================
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from report_engine.core.logging import StructuredLogger
from report_engine.transformers.base_transformer import BaseTransformer
from report_engine.transformers.field_resolver import resolve, to_mapping


@dataclass
class SourceSpec:
    """
    One input collection taking part in a merge.

    Attributes:
        key_field: Field holding the entity key in this collection
        records: Raw records (mappings or objects)
        field_map: Renames source fields into the unified vocabulary
        constants: Fixed fields injected into every record of this source
        name: Label used in diagnostics
    """

    key_field: str
    records: Optional[Iterable[Any]] = None
    field_map: Optional[Dict[str, str]] = None
    constants: Optional[Dict[str, Any]] = None
    name: Optional[str] = None


SourceLike = Union[SourceSpec, Tuple[str, Iterable[Any]]]


@dataclass
class _SourceStats:
    name: str
    processed: int = 0
    skipped: int = 0
    merged: int = 0


def _is_absent_key(key: Any) -> bool:
    return key is None or key == ""


class RowNormalizer(BaseTransformer):
    """
    Merges heterogeneous collections into one row per entity key.

    Sources are applied in caller order. For a key seen more than once the
    later record's fields overwrite earlier ones, except that a None value
    never erases a value already present. Records without a key are skipped
    and counted. Keys keep first-seen order.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.records_merged = 0
        self.source_statistics: List[_SourceStats] = []
        self.structured_logger = StructuredLogger(
            __name__, transformer="row_normalizer", report=self.options.get("report")
        )

    def transform(self, sources: Sequence[SourceLike]) -> Dict[Any, Dict[str, Any]]:
        return self.normalize(sources)

    def normalize(self, sources: Sequence[SourceLike]) -> Dict[Any, Dict[str, Any]]:
        """
        Merge sources into unified rows keyed by entity key.

        Args:
            sources: SourceSpec instances or (key_field, records) pairs

        Returns:
            Ordered mapping of entity key to unified row
        """
        unified: Dict[Any, Dict[str, Any]] = {}
        with self.tracked_run():
            for index, source in enumerate(sources):
                spec = self._coerce_source(source)
                stats = _SourceStats(name=spec.name or f"source_{index}")
                self.source_statistics.append(stats)

                for record in spec.records or ():
                    stats.processed += 1
                    self.records_processed += 1

                    key = resolve(record, spec.key_field)
                    if _is_absent_key(key):
                        stats.skipped += 1
                        self.records_skipped += 1
                        continue

                    mapping = to_mapping(record)
                    mapping.setdefault(spec.key_field, key)

                    row = self._apply_source_rules(mapping, spec)
                    existing = unified.get(key)
                    if existing is None:
                        unified[key] = row
                    else:
                        self._merge_into(existing, row)
                        stats.merged += 1
                        self.records_merged += 1
                    self.records_transformed += 1

                if stats.skipped:
                    warning = f"Skipped {stats.skipped} record(s) without '{spec.key_field}' in {stats.name}"
                    self.add_warning(warning)
                    self.structured_logger.bind(source=stats.name).warning(
                        warning,
                        key_field=spec.key_field,
                        skipped=stats.skipped,
                        processed=stats.processed,
                    )

        self.logger.debug(
            f"Normalized {self.records_processed} record(s) into {len(unified)} row(s)"
        )
        return unified

    def collect(self, records: Optional[Iterable[Any]]) -> List[Dict[str, Any]]:
        """
        Canonicalise unkeyed records (time series, transcripts) in input order.
        """
        rows = []
        with self.tracked_run():
            for record in records or ():
                self.records_processed += 1
                rows.append(to_mapping(record))
                self.records_transformed += 1
        return rows

    def _coerce_source(self, source: SourceLike) -> SourceSpec:
        if isinstance(source, SourceSpec):
            return source
        key_field, records = source
        return SourceSpec(key_field=key_field, records=records)

    def _apply_source_rules(self, mapping: Dict[str, Any], spec: SourceSpec) -> Dict[str, Any]:
        if spec.field_map:
            row = {spec.field_map.get(name, name): value for name, value in mapping.items()}
        else:
            row = dict(mapping)
        if spec.constants:
            row.update(spec.constants)
        return row

    @staticmethod
    def _merge_into(existing: Dict[str, Any], incoming: Dict[str, Any]):
        for name, value in incoming.items():
            if value is None and existing.get(name) is not None:
                continue
            existing[name] = value

    def _clear_counters(self):
        super()._clear_counters()
        self.records_merged = 0
        self.source_statistics = []

    def _generate_statistics(self) -> Dict[str, Any]:
        statistics = super()._generate_statistics()
        statistics["records_merged"] = self.records_merged
        statistics["sources"] = [
            {
                "name": stats.name,
                "processed": stats.processed,
                "merged": stats.merged,
                "skipped": stats.skipped,
            }
            for stats in self.source_statistics
        ]
        return statistics
