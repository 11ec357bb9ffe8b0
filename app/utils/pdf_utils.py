"""
PDF generation utilities for transport pass receipts
"""

import io
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm, inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.flowables import HRFlowable

# Band colour printed on the pass for each receipt colour
RECEIPT_BAND_COLORS = {
    "white": colors.HexColor("#F5F5F5"),
    "blue": colors.HexColor("#2196F3"),
    "yellow": colors.HexColor("#FFC107"),
    "green": colors.HexColor("#4CAF50"),
}


class PDFGenerator:
    """Main PDF generation utilities"""

    def __init__(self, page_size=A4, margins=None):
        self.page_size = page_size
        self.margins = margins or {'top': 2*cm, 'bottom': 2*cm, 'left': 2*cm, 'right': 2*cm}
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles"""
        self.styles.add(ParagraphStyle(
            name='PassTitle',
            parent=self.styles['Heading1'],
            fontSize=22,
            textColor=colors.darkblue,
            spaceAfter=6,
            alignment=TA_CENTER
        ))

        self.styles.add(ParagraphStyle(
            name='PassSubtitle',
            parent=self.styles['Normal'],
            fontSize=12,
            textColor=colors.grey,
            spaceAfter=12,
            alignment=TA_CENTER
        ))

        self.styles.add(ParagraphStyle(
            name='PassHeading',
            parent=self.styles['Heading2'],
            fontSize=14,
            textColor=colors.darkblue,
            spaceBefore=14,
            spaceAfter=8
        ))

        self.styles.add(ParagraphStyle(
            name='PassFooter',
            parent=self.styles['Normal'],
            fontSize=9,
            textColor=colors.grey,
            alignment=TA_CENTER
        ))

    def create_document(self, buffer: io.BytesIO, title: str = None,
                        author: str = None, subject: str = None) -> SimpleDocTemplate:
        """Create a new PDF document writing into ``buffer``"""
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self.page_size,
            topMargin=self.margins['top'],
            bottomMargin=self.margins['bottom'],
            leftMargin=self.margins['left'],
            rightMargin=self.margins['right']
        )

        if title:
            doc.title = title
        if author:
            doc.author = author
        if subject:
            doc.subject = subject

        return doc

    def _details_table(self, rows: List[List[str]]) -> Table:
        """Two-column label/value table"""
        table = Table(rows, colWidths=[2.2*inch, 4*inch])
        table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 11),
            ('TEXTCOLOR', (0, 0), (0, -1), colors.darkslategray),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
            ('LINEBELOW', (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ]))
        return table

    def _color_band(self, label: str, receipt_color: str) -> Table:
        band_color = RECEIPT_BAND_COLORS.get(receipt_color, RECEIPT_BAND_COLORS["white"])
        text_color = colors.black if receipt_color in ("white", "yellow") else colors.white

        band = Table([[label]], colWidths=[6.2*inch], rowHeights=[0.5*inch])
        band.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), band_color),
            ('TEXTCOLOR', (0, 0), (-1, -1), text_color),
            ('FONTNAME', (0, 0), (-1, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 14),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('BOX', (0, 0), (-1, -1), 1, colors.darkgrey),
        ]))
        return band

    def generate_transport_pass(self, pass_data: Dict[str, Any]) -> bytes:
        """
        Render a boarding-pass style transport receipt.

        ``pass_data`` keys: issuer, receipt_number, receipt_color, coverage,
        student (dict), route (dict), stop_name, academic_year, amount,
        currency, valid_from, valid_until, status, transaction_id.
        """
        buffer = io.BytesIO()
        doc = self.create_document(
            buffer,
            title=f"Transport Pass {pass_data['receipt_number']}",
            author=pass_data.get('issuer'),
            subject="Transport fee receipt",
        )
        story = []

        story.append(Paragraph(pass_data.get('issuer') or "Transport Office", self.styles['PassTitle']))
        story.append(Paragraph("Transport Pass", self.styles['PassSubtitle']))
        story.append(Paragraph(f"<b>Receipt No:</b> {pass_data['receipt_number']}", self.styles['PassSubtitle']))
        story.append(HRFlowable(width="100%", thickness=1, color=colors.lightgrey))
        story.append(Spacer(1, 12))

        story.append(self._color_band(pass_data['coverage'], pass_data.get('receipt_color', 'white')))

        student = pass_data.get('student') or {}
        story.append(Paragraph("Passenger", self.styles['PassHeading']))
        story.append(self._details_table([
            ["Name", student.get('full_name') or "-"],
            ["Roll Number", student.get('roll_number') or "-"],
            ["Email", student.get('email') or "-"],
            ["Mobile", student.get('mobile') or "-"],
        ]))

        route = pass_data.get('route') or {}
        story.append(Paragraph("Journey", self.styles['PassHeading']))
        story.append(self._details_table([
            ["Route", _route_label(route)],
            ["From", route.get('start_location') or "-"],
            ["To", route.get('end_location') or "-"],
            ["Boarding Stop", pass_data.get('stop_name') or "-"],
        ]))

        story.append(Paragraph("Payment", self.styles['PassHeading']))
        story.append(self._details_table([
            ["Academic Year", pass_data.get('academic_year') or "-"],
            ["Coverage", pass_data['coverage']],
            ["Amount", format_amount(pass_data.get('amount'), pass_data.get('currency', 'INR'))],
            ["Valid From", _format_date(pass_data.get('valid_from'))],
            ["Valid Until", _format_date(pass_data.get('valid_until'))],
            ["Status", (pass_data.get('status') or "-").title()],
            ["Transaction ID", pass_data.get('transaction_id') or "-"],
        ]))

        story.append(Spacer(1, 24))
        story.append(HRFlowable(width="100%", thickness=1, color=colors.lightgrey))
        story.append(Paragraph(
            f"Generated on {datetime.now().strftime('%d %b %Y %H:%M')}. "
            "Carry this pass while travelling.",
            self.styles['PassFooter']
        ))

        doc.build(story)
        return buffer.getvalue()


def format_amount(amount: Optional[Any], currency: str = "INR") -> str:
    if amount is None:
        return "-"
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return f"{currency} {value:,.2f}"


def _format_date(value: Optional[Any]) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime('%d %b %Y')
    return str(value) if value else "-"


def _route_label(route: Dict[str, Any]) -> str:
    number = route.get('route_number')
    name = route.get('route_name')
    if number and name:
        return f"{number} - {name}"
    return number or name or "-"
