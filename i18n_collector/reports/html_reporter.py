"""HTML report for the fragment diff."""

from pathlib import Path
from typing import Iterable, Optional

from ..features.diff import DiffResult
from ..utils.logging import get_logger

logger = get_logger('reports.html')

REPORT_NAME = 'i18n.html'

# Sıra önemli: '&' önce, yoksa sonraki entity'ler tekrar escape edilir
_ESCAPES = (
    ('&', '&amp;'),
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&apos;'),
)

_CSS = """
    * {
      padding: 0;
      margin: 0;
    }
    ul {
      list-style: none;
    }
    li {
      border-bottom: 1px dashed #ccc;
      padding-left: 10px;
      line-height: 24px;
      font-size: 14px;
    }
    .add {
      background-color: #ecfdf0;
    }
    .reduce {
      background-color: #fbe9eb;
    }
    pre {
      font-family: "Microsoft YaHei", "PingFang SC", sans-serif;
      white-space: pre-wrap;
    }
    .total-bar {
      padding: 10px;
      background-color: #000;
      color: #fff;
      user-select: none;
    }
    .total-bar span {
      margin-left: 10px;
      margin-right: 10px;
    }
"""


def escape_html(text: str) -> str:
    """Escape &, <, >, " and ' (in that order)."""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def _items(values: Iterable[str], class_name: str) -> str:
    return ''.join(
        f'<li class="{class_name}"><pre>{escape_html(value)}</pre></li>'
        for value in values
    )


class HTMLReporter:
    """
    Fragment diff raporu oluşturur.

    Tek dosya, harici kaynak yok:
    - Üstte sayaçlar (eklenen, kaldırılan, aynı/toplam)
    - Altta tek liste: eklenenler, kaldırılanlar, değişmeyenler
    """

    @staticmethod
    def render(result: DiffResult, title: str = "i18n fragments") -> str:
        """
        Rapor HTML'ini oluşturur.

        Args:
            result: Diff sonucu
            title: Sayfa başlığı

        Returns:
            HTML içeriği
        """
        common_label = 'Same' if result.has_differences else 'Total'

        return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta http-equiv="X-UA-Compatible" content="IE=edge">
    <meta name="viewport" content="width=device-width,initial-scale=1.0">
    <title>{escape_html(title)}</title>
    <style>{_CSS}    </style>
  </head>
  <body>
    <p class="total-bar">
      <span>Added: {len(result.added)}</span>
      <span>Removed: {len(result.removed)}</span>
      <span>{common_label}: {len(result.common)}</span>
    </p>
    <ul>
      {_items(result.added, 'add')}
      {_items(result.removed, 'reduce')}
      {_items(result.common, '')}
    </ul>
  </body>
</html>
"""

    @staticmethod
    def generate(
        result: DiffResult,
        output_path: Optional[Path] = None,
        title: str = "i18n fragments"
    ) -> Path:
        """
        HTML raporunu dosyaya yazar.

        Args:
            result: Diff sonucu
            output_path: Çıktı dosya yolu (varsayılan: ./i18n.html)
            title: Sayfa başlığı

        Returns:
            Oluşturulan HTML dosyasının yolu
        """
        if output_path is None:
            output_path = Path.cwd() / REPORT_NAME

        html_content = HTMLReporter.render(result, title=title)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html_content)

        logger.info(f"HTML report: {output_path}")
        return output_path


def render(result: DiffResult) -> str:
    """Render the report page for a diff result."""
    return HTMLReporter.render(result)
