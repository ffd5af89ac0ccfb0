"""Fragment diff module - compare current fragments with the baseline."""

import json
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass, field

from ..utils.colors import Colors


@dataclass
class DiffResult:
    """Diff sonucu."""
    added: List[str] = field(default_factory=list)    # Kodda var, baseline'da yok
    removed: List[str] = field(default_factory=list)  # Baseline'da var, kodda yok
    common: List[str] = field(default_factory=list)   # Her ikisinde var

    @property
    def total(self) -> int:
        """Shown as "Same" next to differences, "Total" when there are none."""
        return len(self.common)

    @property
    def has_differences(self) -> bool:
        return bool(self.added or self.removed)

    def summary(self) -> Dict[str, int]:
        return {
            'added': len(self.added),
            'removed': len(self.removed),
            'common': len(self.common),
        }


def diff(current: Sequence[str], baseline: Sequence[str]) -> DiffResult:
    """
    Multiset diff of the current fragments against the baseline.

    Duplicates count individually: each current value consumes one equal
    value from the baseline, first remaining occurrence first. Whatever is
    left of the baseline is reported as removed, in baseline order.

    Example:
        >>> r = diff(["a", "a", "b"], ["a"])
        >>> r.common, r.added, r.removed
        (['a'], ['a', 'b'], [])
    """
    current = list(current)
    baseline = list(baseline)

    # Baseline yoksa her şey yeni
    if not baseline:
        return DiffResult(added=current)

    # Kodda hiç fragment yoksa baseline'ın tamamı azalmış
    if not current:
        return DiffResult(removed=baseline)

    result = DiffResult()
    available = Counter(baseline)

    for value in current:
        if available[value] > 0:
            available[value] -= 1
            result.common.append(value)
        else:
            result.added.append(value)

    # Eşleşen adet kadar ilk oluşumu atla, kalanlar removed
    matched = Counter(result.common)
    for value in baseline:
        if matched[value] > 0:
            matched[value] -= 1
        else:
            result.removed.append(value)

    return result


EXPORT_FORMATS = ("md", "json", "txt")


class LocalizationDiff:
    """
    Fragment diff hesaplayıcısı.

    Projede toplanan fragment'ları yayınlanmış çeviri setiyle karşılaştırır:
    - Yeni fragment'lar (added)
    - Kaldırılan fragment'lar (removed)
    - Değişmeyen fragment'lar (common)
    """

    def compare(self, current: Sequence[str], baseline: Sequence[str]) -> DiffResult:
        """
        İki fragment listesi arasındaki farkları hesapla.

        Args:
            current: Derlemede toplanan fragment değerleri
            baseline: Yayınlanmış çeviri setindeki değerler

        Returns:
            DiffResult
        """
        return diff(current, baseline)

    def print_diff(self, result: DiffResult, show_common: bool = False, limit: int = 50):
        """
        Diff sonucunu yazdır.

        Args:
            result: DiffResult
            show_common: Değişmeyen fragment'ları da göster
            limit: Maksimum gösterilecek entry sayısı
        """
        print(f"\n{Colors.bold('📊 FRAGMENT DIFF')}")
        print("=" * 70)
        print(f"  {Colors.success('+')} Added: {len(result.added)}")
        print(f"  {Colors.error('−')} Removed: {len(result.removed)}")
        label = 'Same' if result.has_differences else 'Total'
        print(f"  {Colors.info('=')} {label}: {result.total}")
        print()

        sections = [
            ('➕ ADDED', result.added, Colors.added),
            ('❌ REMOVED', result.removed, Colors.removed),
        ]
        if show_common:
            sections.append(('✅ SAME', result.common, Colors.common))

        for title, values, style in sections:
            if not values:
                continue

            print(f"{Colors.bold(title)} ({len(values)})")
            print("-" * 40)
            for value in values[:limit]:
                print(f"  {style(self._truncate(value))}")
            if len(values) > limit:
                print(f"  ... and {len(values) - limit} more")
            print()

        print("=" * 70)
        if not result.has_differences:
            print(f"{Colors.success('✅ No differences found!')}")
        else:
            print(f"Total differences: {len(result.added) + len(result.removed)}")

    def _truncate(self, text: Optional[str], max_len: int = 60) -> str:
        """Metni tek satıra indir ve kısalt."""
        if not text:
            return ""
        text = text.replace('\n', '⏎')
        if len(text) <= max_len:
            return text
        return text[:max_len - 3] + "..."

    def export_diff(self, result: DiffResult, output_path: Path, format: str = "md"):
        """
        Diff sonucunu dosyaya export et.

        Args:
            result: DiffResult
            output_path: Çıktı dosya yolu
            format: Çıktı formatı (md, json, txt)

        Raises:
            ValueError: Bilinmeyen format
        """
        if format not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format: {format}")

        output_path.parent.mkdir(parents=True, exist_ok=True)

        if format == "json":
            data = {
                "summary": result.summary(),
                "added": result.added,
                "removed": result.removed,
                "common": result.common,
            }
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

        elif format == "md":
            lines = [
                "# Fragment Diff",
                "",
                "## Summary",
                "",
                "| Type | Count |",
                "|------|-------|",
                f"| Added | {len(result.added)} |",
                f"| Removed | {len(result.removed)} |",
                f"| Same | {len(result.common)} |",
                "",
            ]

            for title, values in (("Added", result.added), ("Removed", result.removed)):
                if values:
                    lines.extend([f"## {title}", ""])
                    for value in values:
                        lines.append(f"- `{value}`")
                    lines.append("")

            with open(output_path, 'w', encoding='utf-8') as f:
                f.write('\n'.join(lines))

        else:  # txt
            lines = [
                "Fragment Diff",
                "=" * 50,
                "",
                f"Added: {len(result.added)}",
                f"Removed: {len(result.removed)}",
                f"Same: {len(result.common)}",
                "",
            ]

            for title, values in (("Added", result.added), ("Removed", result.removed)):
                if values:
                    lines.append(f"--- {title} ---")
                    for value in values:
                        lines.append(f"  {value}")
                    lines.append("")

            with open(output_path, 'w', encoding='utf-8') as f:
                f.write('\n'.join(lines))

        print(f"{Colors.success('✓')} Diff exported to: {output_path}")
