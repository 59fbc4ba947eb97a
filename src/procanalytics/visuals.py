"""Optional chart output for the dashboard: spend trend, vendor risk, proposal pricing."""

from __future__ import annotations

import io
import re
import textwrap
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

try:  # pragma: no cover - optional dependency
    import matplotlib

    matplotlib.use("Agg")  # Ensure headless operation on CI/servers.
    import matplotlib.pyplot as plt
    from matplotlib.ticker import StrMethodFormatter
except Exception:  # pragma: no cover - matplotlib unavailable or misconfigured
    plt = None  # type: ignore
    StrMethodFormatter = None  # type: ignore

from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .cost_review import OUTLIER_MULTIPLIER, average_unit_price
from .errors import DivisionError
from .models import MonthlyStat, Proposal, Vendor
from .risk import CONCERN_THRESHOLD, is_elevated

PRIMARY = "#00d6cb"
ACCENT = "#8b5cf6"
ERROR = "#ef4444"
SUCCESS = "#10b981"
WARNING = "#f59e0b"


@dataclass
class _ChartRecord:
    """Metadata captured for PDF bundling."""

    title: str
    caption: str
    image_bytes: bytes


def _sanitize_name(value: str, max_length: int = 60) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9_-]+", "_", value).strip("_")
    if not cleaned:
        cleaned = "chart"
    return cleaned[:max_length]


def _currency_formatter() -> Optional[StrMethodFormatter]:
    if StrMethodFormatter is None:
        return None
    return StrMethodFormatter("$ {x:,.0f}")


def _write_figure(
    fig: "plt.Figure",
    base_name: str,
    output_dir: Path,
    *,
    save_png: bool,
    save_pdf: bool,
    dpi: int = 140,
) -> Tuple[List[Path], bytes]:
    output_dir.mkdir(parents=True, exist_ok=True)
    created: List[Path] = []
    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", dpi=dpi, bbox_inches="tight")
    png_bytes = buffer.getvalue()
    if save_png:
        png_path = output_dir / f"{base_name}.png"
        with open(png_path, "wb") as handle:
            handle.write(png_bytes)
        created.append(png_path)
    if save_pdf:
        pdf_path = output_dir / f"{base_name}.pdf"
        fig.savefig(pdf_path, format="pdf", bbox_inches="tight")
        created.append(pdf_path)
    plt.close(fig)
    return created, png_bytes


def _bundle_pdf(entries: Sequence[_ChartRecord], pdf_path: Path) -> None:
    c = canvas.Canvas(str(pdf_path), pagesize=landscape(letter))
    page_width, page_height = landscape(letter)
    margin = 36
    text_width = page_width - 2 * margin
    image_height = page_height - 2 * margin - 32
    for entry in entries:
        c.setFont("Helvetica-Bold", 16)
        c.drawString(margin, page_height - margin + 4, entry.title)
        image = ImageReader(io.BytesIO(entry.image_bytes))
        img_width, img_height = image.getSize()
        scale = min(text_width / img_width, image_height / img_height)
        draw_width = img_width * scale
        draw_height = img_height * scale
        x = (page_width - draw_width) / 2
        y = margin + 24
        c.drawImage(image, x, y, width=draw_width, height=draw_height, preserveAspectRatio=True, mask="auto")
        c.setFont("Helvetica", 10)
        text_y = margin
        for line in textwrap.wrap(entry.caption, width=110) or [entry.caption]:
            c.drawString(margin, text_y, line)
            text_y -= 12
        c.showPage()
    c.save()


def emit_visualizations(
    vendors: Sequence[Vendor],
    proposals: Sequence[Proposal],
    monthly_stats: Sequence[MonthlyStat],
    output_dir: str | Path,
    *,
    format: str = "png",
    bundle_pdf: bool = True,
) -> Dict[str, object]:
    """Write dashboard charts to ``output_dir``.

    Returns a dict with ``charts`` (written paths), ``pdf`` (bundle path or
    ``None``) and ``skipped`` (reasons a chart was not produced).
    """

    if plt is None:
        return {"charts": [], "pdf": None, "skipped": ["matplotlib not available"]}

    target_dir = Path(output_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    fmt = (format or "png").lower()
    save_png = fmt in {"png", "both"}
    save_pdf = fmt in {"pdf", "both"}
    if not (save_png or save_pdf):
        save_png = True

    charts: List[Path] = []
    skipped: List[str] = []
    pdf_entries: List[_ChartRecord] = []
    formatter = _currency_formatter()

    def record_chart(fig: "plt.Figure", base_name: str, title: str, caption: str) -> None:
        try:
            created, png_bytes = _write_figure(fig, base_name, target_dir, save_png=save_png, save_pdf=save_pdf)
            charts.extend(created)
            if bundle_pdf:
                pdf_entries.append(_ChartRecord(title=title, caption=caption, image_bytes=png_bytes))
        except Exception as exc:  # pragma: no cover - robust path
            skipped.append(f"failed to save {base_name}: {exc}")

    # Spend vs savings ---------------------------------------------------------------
    if not monthly_stats:
        skipped.append("spend vs savings skipped (no monthly stats)")
    else:
        months = [stat.month for stat in monthly_stats]
        x = np.arange(len(months))
        spend = np.array([stat.spend for stat in monthly_stats], dtype=float)
        savings = np.array([stat.savings for stat in monthly_stats], dtype=float)
        fig, ax = plt.subplots(figsize=(8, 5), dpi=140)
        ax.plot(x, spend, color=PRIMARY, linewidth=2, label="Spend")
        ax.fill_between(x, spend, color=PRIMARY, alpha=0.2)
        ax.plot(x, savings, color=ACCENT, linewidth=2, label="Savings")
        ax.fill_between(x, savings, color=ACCENT, alpha=0.2)
        ax.set_xticks(x)
        ax.set_xticklabels(months)
        ax.set_title("Spend vs Savings Analysis")
        if formatter is not None:
            ax.yaxis.set_major_formatter(formatter)
        ax.grid(True, axis="y", linestyle="--", alpha=0.3)
        ax.legend(loc="upper left", frameon=False)
        fig.tight_layout()
        record_chart(fig, "spend_vs_savings", "Spend vs Savings", "Monthly procurement spend against realized savings.")

    # Vendor risk scores ---------------------------------------------------------------
    if not vendors:
        skipped.append("vendor risk chart skipped (no vendors)")
    else:
        ordered = sorted(vendors, key=lambda v: v.risk_score, reverse=True)
        names = [v.name for v in ordered]
        scores = [v.risk_score for v in ordered]
        colors = [ERROR if is_elevated(v.risk_score) else SUCCESS for v in ordered]
        fig, ax = plt.subplots(figsize=(8, 5), dpi=140)
        ax.barh(names[::-1], scores[::-1], color=colors[::-1])
        ax.axvline(CONCERN_THRESHOLD, color=WARNING, linestyle="--", linewidth=1.5, label="Concern threshold")
        ax.set_xlim(0, 100)
        ax.set_xlabel("Risk score")
        ax.set_title("Vendor Risk Scores")
        ax.grid(True, axis="x", linestyle="--", alpha=0.3)
        ax.legend(loc="lower right", frameon=False)
        fig.tight_layout()
        record_chart(
            fig,
            "vendor_risk_scores",
            "Vendor Risk Scores",
            "Vendors ranked by risk score; red bars exceed the concern threshold.",
        )

    # Per-proposal unit prices -------------------------------------------------------
    for proposal in proposals:
        try:
            avg_price = average_unit_price(proposal.items)
        except DivisionError:
            skipped.append(f"proposal chart skipped for {proposal.id} (no line item quantity)")
            continue
        labels = [textwrap.shorten(item.description, width=28, placeholder="...") for item in proposal.items]
        prices = [item.unit_price for item in proposal.items]
        threshold = avg_price * OUTLIER_MULTIPLIER
        colors = [WARNING if price > threshold else PRIMARY for price in prices]
        fig, ax = plt.subplots(figsize=(8, 5), dpi=140)
        ax.bar(np.arange(len(prices)), prices, color=colors)
        ax.axhline(avg_price, color=SUCCESS, linestyle="-", linewidth=1.5, label=f"Average ${avg_price:,.2f}")
        ax.axhline(threshold, color=ERROR, linestyle="--", linewidth=1.5, label=f"Review threshold ${threshold:,.2f}")
        ax.set_xticks(np.arange(len(prices)))
        ax.set_xticklabels(labels, rotation=30, ha="right")
        ax.set_ylabel("Unit price")
        ax.set_title(f"{proposal.title}: Unit Prices")
        if formatter is not None:
            ax.yaxis.set_major_formatter(formatter)
        ax.grid(True, axis="y", linestyle="--", alpha=0.3)
        ax.legend(frameon=False)
        fig.tight_layout()
        record_chart(
            fig,
            f"proposal_{_sanitize_name(proposal.id)}_unit_prices",
            f"Proposal {proposal.id.upper()} Unit Prices",
            "Line item unit prices against the quantity-weighted average; highlighted bars are flagged for review.",
        )

    # Bundle PDF ---------------------------------------------------------------------
    pdf_path: Optional[Path] = None
    if bundle_pdf and pdf_entries:
        try:
            pdf_path = target_dir / "Procurement_Visual_Summary.pdf"
            _bundle_pdf(pdf_entries, pdf_path)
        except Exception as exc:  # pragma: no cover - defensive
            skipped.append(f"failed to build summary PDF: {exc}")
            pdf_path = None

    return {
        "charts": [str(path) for path in charts],
        "pdf": str(pdf_path) if pdf_path else None,
        "skipped": skipped,
    }


__all__ = ["emit_visualizations"]
