"""
Work Registry PDF Report
Branded A4 ledger: header band, period, summary panels, detail table and a
footer on every page.
"""

import io
import logging
import re
from datetime import datetime
from typing import Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from ...config import BUSINESS_NAME
from ...errors import ExportPreconditionError
from ...models import WorkRecord
from ...shared.clock import local_now
from ...shared.formatting import fmt_day, fmt_money, fmt_timestamp
from .aggregation import client_label
from .filters import period_label
from .schemas import AggregateStats, DateFilter

logger = logging.getLogger(__name__)

REPORT_TITLE = "Registro de Trabajos"
FOOTER_LABEL = f"{BUSINESS_NAME} - Sistema de Gestión"

# Fixed column proportions of the content width: date, client, service, amount
COLUMN_FRACTIONS = (0.15, 0.27, 0.39, 0.19)


def report_filename(generated_at: datetime, business_name: str = BUSINESS_NAME) -> str:
    """e.g. 302-barber-registro-2025-06-20-1405.pdf"""
    slug = re.sub(r"[^a-z0-9]+", "-", business_name.lower()).strip("-") or "reporte"
    return f"{slug}-registro-{generated_at.strftime('%Y-%m-%d-%H%M')}.pdf"


def _markup(text: Optional[str]) -> str:
    """Escape free text for a Paragraph, keeping line breaks"""
    return escape(text or "").replace("\n", "<br/>")


class WorkRegistryReport:
    """Generate the work registry PDF for one filtered record set"""

    def __init__(
        self,
        records: Sequence[WorkRecord],
        stats: AggregateStats,
        date_filter: DateFilter,
        generated_at: Optional[datetime] = None,
    ):
        self.records = records
        self.stats = stats
        self.date_filter = date_filter
        self.generated_at = generated_at or local_now()
        self.pages_drawn: list[int] = []

        # PDF settings
        self.page_width, self.page_height = A4
        self.margin = 14 * mm
        self.content_width = self.page_width - (2 * self.margin)

        self.ink = colors.HexColor("#191923")
        self.accent = colors.HexColor("#84bd00")
        self.panel = colors.HexColor("#f0f0f5")
        self.stripe = colors.HexColor("#f8f8fa")
        self.muted = colors.HexColor("#646478")
        self.rule = colors.HexColor("#dcdcdc")

        styles = getSampleStyleSheet()
        self.styles = {
            "brand": ParagraphStyle(
                "Brand", parent=styles["Title"], fontName="Helvetica-Bold", fontSize=24,
                leading=28, textColor=colors.white, alignment=TA_CENTER, spaceAfter=0,
            ),
            "subtitle": ParagraphStyle(
                "Subtitle", parent=styles["Normal"], fontSize=14, leading=18,
                textColor=colors.white, alignment=TA_CENTER,
            ),
            "stamp": ParagraphStyle(
                "Stamp", parent=styles["Normal"], fontSize=9, leading=11,
                textColor=colors.HexColor("#c8c8c8"), alignment=TA_CENTER,
            ),
            "period": ParagraphStyle(
                "Period", parent=styles["Normal"], fontSize=10, leading=12,
                textColor=colors.HexColor("#3c3c3c"),
            ),
            "panel_label": ParagraphStyle(
                "PanelLabel", parent=styles["Normal"], fontSize=8, leading=10,
                textColor=self.muted, alignment=TA_CENTER,
            ),
            "panel_value": ParagraphStyle(
                "PanelValue", parent=styles["Normal"], fontName="Helvetica-Bold", fontSize=15,
                leading=19, textColor=self.ink, alignment=TA_CENTER,
            ),
            "section": ParagraphStyle(
                "Section", parent=styles["Heading2"], fontName="Helvetica-Bold", fontSize=12,
                leading=15, textColor=self.ink, spaceBefore=0, spaceAfter=0,
            ),
            "cell": ParagraphStyle(
                "Cell", parent=styles["Normal"], fontSize=9, leading=11,
                textColor=colors.HexColor("#282828"),
            ),
            "amount": ParagraphStyle(
                "Amount", parent=styles["Normal"], fontName="Helvetica-Bold", fontSize=9,
                leading=11, textColor=self.accent, alignment=TA_RIGHT,
            ),
        }

    @property
    def filename(self) -> str:
        return report_filename(self.generated_at)

    def generate(self) -> bytes:
        """Generate PDF and return bytes"""
        if not self.records:
            raise ExportPreconditionError()

        logger.info(f"📄 Generating work registry PDF ({len(self.records)} records)")
        self.pages_drawn = []

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=self.margin,
            leftMargin=self.margin,
            topMargin=self.margin,
            bottomMargin=20 * mm,
            title=f"{BUSINESS_NAME} - {REPORT_TITLE}",
            author=BUSINESS_NAME,
        )

        story = [
            self._header(),
            Spacer(1, 3 * mm),
            HRFlowable(width="100%", thickness=1, color=self.accent),
            Spacer(1, 4 * mm),
            Paragraph(f"<b>Período:</b> {escape(period_label(self.date_filter))}", self.styles["period"]),
            Spacer(1, 5 * mm),
            self._summary_panels(),
            Spacer(1, 8 * mm),
            Paragraph("Detalle de Trabajos", self.styles["section"]),
            Spacer(1, 3 * mm),
            self._detail_table(),
        ]

        doc.build(story, onFirstPage=self._draw_footer, onLaterPages=self._draw_footer)

        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.info(f"✅ Generated work registry PDF ({len(pdf_bytes)} bytes, {len(self.pages_drawn)} pages)")
        return pdf_bytes

    def _header(self) -> Table:
        rows = [
            [Paragraph(escape(BUSINESS_NAME.upper()), self.styles["brand"])],
            [Paragraph(REPORT_TITLE, self.styles["subtitle"])],
            [Paragraph(f"Generado: {fmt_timestamp(self.generated_at)}", self.styles["stamp"])],
        ]
        header = Table(rows, colWidths=[self.content_width])
        header.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), self.ink),
                    ("TOPPADDING", (0, 0), (-1, 0), 10),
                    ("BOTTOMPADDING", (0, -1), (-1, -1), 10),
                    ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                ]
            )
        )
        return header

    def _summary_panels(self) -> Table:
        def panel(label: str, value: str, inverted: bool = False) -> list:
            label_style = self.styles["panel_label"]
            value_style = self.styles["panel_value"]
            if inverted:
                label_style = ParagraphStyle("PanelLabelInv", parent=label_style, textColor=colors.white)
                value_style = ParagraphStyle("PanelValueInv", parent=value_style, textColor=colors.white)
            return [Paragraph(label, label_style), Paragraph(escape(value), value_style)]

        gap = 5 * mm
        width = (self.content_width - 2 * gap) / 3
        row = [
            panel("TRABAJOS REALIZADOS", str(self.stats.count)),
            "",
            panel("TOTAL GANANCIAS", fmt_money(self.stats.total), inverted=True),
            "",
            panel("PROMEDIO", fmt_money(self.stats.average)),
        ]
        panels = Table([row], colWidths=[width, gap, width, gap, width])
        panels.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (0, 0), self.panel),
                    ("BACKGROUND", (2, 0), (2, 0), self.accent),
                    ("BACKGROUND", (4, 0), (4, 0), self.panel),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("TOPPADDING", (0, 0), (-1, -1), 8),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
                ]
            )
        )
        return panels

    def _detail_table(self) -> Table:
        cell = self.styles["cell"]
        data = [["Fecha", "Cliente", "Servicio", "Monto"]]
        for record in self.records:
            data.append(
                [
                    fmt_day(record.service_date),
                    Paragraph(_markup(client_label(record)), cell),
                    Paragraph(_markup(record.service_description), cell),
                    Paragraph(escape(fmt_money(record.amount_charged)), self.styles["amount"]),
                ]
            )

        table = Table(
            data,
            colWidths=[self.content_width * fraction for fraction in COLUMN_FRACTIONS],
            repeatRows=1,
        )
        table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), self.ink),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONT", (0, 0), (-1, 0), "Helvetica-Bold", 10),
                    ("ALIGN", (0, 0), (2, 0), "LEFT"),
                    ("ALIGN", (3, 0), (3, 0), "RIGHT"),
                    ("TOPPADDING", (0, 0), (-1, 0), 6),
                    ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                    # Data rows
                    ("FONT", (0, 1), (0, -1), "Helvetica", 9),
                    ("VALIGN", (0, 1), (-1, -1), "TOP"),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, self.stripe]),
                    ("LINEBELOW", (0, 0), (-1, -1), 0.25, self.rule),
                    ("LEFTPADDING", (0, 0), (-1, -1), 5),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 5),
                    ("TOPPADDING", (0, 1), (-1, -1), 5),
                    ("BOTTOMPADDING", (0, 1), (-1, -1), 5),
                ]
            )
        )
        return table

    def _draw_footer(self, canvas_obj, doc):
        """Page number and business label at the bottom of every page"""
        page_num = canvas_obj.getPageNumber()
        self.pages_drawn.append(page_num)
        canvas_obj.saveState()
        canvas_obj.setFont("Helvetica", 8)
        canvas_obj.setFillColor(colors.HexColor("#787878"))
        canvas_obj.drawCentredString(self.page_width / 2, 10 * mm, f"Página {page_num}")
        canvas_obj.drawString(self.margin, 10 * mm, FOOTER_LABEL)
        canvas_obj.restoreState()
