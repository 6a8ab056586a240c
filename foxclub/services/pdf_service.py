"""
설문 폼 PDF 내보내기

패밀리마다 하나의 표를 그립니다.
- TYPE_1: Question / Score / Top / Bot / Talk / Notes
- TYPE_2: Question / Score / Inclure / Notes
응답이 없는 문항은 "-"로 표시합니다.
"""

from datetime import date
from html import escape
from io import BytesIO
from typing import Dict, Iterable, Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from foxclub.models.form import FormAnswer
from foxclub.models.question import QuestionFamily, QuestionType

SCORE_LABELS = {
    4: "Fantasme",
    3: "Ok",
    2: "Curieux",
    1: "Non",
}

LEGEND = "Legende: Fantasme = Score 4 | Ok = Score 3 | Curieux = Score 2 | Non = Score 1"

HEADER_FILL = colors.HexColor("#FFEDD5")


def score_label(score: Optional[int]) -> str:
    return SCORE_LABELS.get(score, "-")


def _flag(value: Optional[bool]) -> str:
    return "Oui" if value else "-"


def family_headers(family_type: QuestionType) -> list[str]:
    if QuestionType(family_type) == QuestionType.TYPE_1:
        return ["Question", "Score", "Top", "Bot", "Talk", "Notes"]
    return ["Question", "Score", "Inclure", "Notes"]


def family_rows(family: QuestionFamily, answers: Dict[int, FormAnswer]) -> list[list[str]]:
    rows = []
    is_type1 = QuestionType(family.type) == QuestionType.TYPE_1
    for question in family.questions:
        answer = answers.get(int(question.question_id))
        if answer is None:
            cells = ["-", "-", "-", ""] if is_type1 else ["-", ""]
            rows.append([question.text, "-"] + cells)
            continue
        if is_type1:
            rows.append([
                question.text,
                score_label(answer.score),
                _flag(answer.top),
                _flag(answer.bot),
                _flag(answer.talk),
                answer.notes or "",
            ])
        else:
            rows.append([
                question.text,
                score_label(answer.score),
                _flag(answer.include),
                answer.notes or "",
            ])
    return rows


def _draw_page_number(canvas, doc):
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    page_width, _ = doc.pagesize
    canvas.drawCentredString(page_width / 2, 10 * mm, f"Page {doc.page}")
    canvas.restoreState()


def render_form_pdf(
    families: Iterable[QuestionFamily],
    answers: Dict[int, FormAnswer],
    user_name: Optional[str] = None,
    today: Optional[date] = None,
) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=12 * mm,
        bottomMargin=18 * mm,
        title="Fox Club - Formulaire",
    )
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle("FoxTitle", parent=styles["Title"], fontSize=20, alignment=TA_CENTER)
    family_style = ParagraphStyle("FoxFamily", parent=styles["Heading3"], spaceBefore=8, spaceAfter=2)
    cell_style = ParagraphStyle("FoxCell", parent=styles["Normal"], fontSize=8, leading=10)

    story = [Paragraph("Fox Club - Formulaire", title_style)]
    meta = f"Date: {(today or date.today()).strftime('%d/%m/%Y')}"
    if user_name:
        meta = f"Utilisateur: {escape(user_name)} &nbsp;&nbsp; {meta}"
    story.append(Paragraph(meta, styles["Normal"]))
    story.append(Paragraph(LEGEND, styles["Italic"]))
    story.append(Spacer(1, 6 * mm))

    for family in families:
        family_type = QuestionType(family.type)
        subtitle = "(Score, Top, Bot, Talk)" if family_type == QuestionType.TYPE_1 else "(Score, Inclure)"
        story.append(Paragraph(f"{escape(family.label)} <i>{subtitle}</i>", family_style))
        data = [family_headers(family_type)]
        for row in family_rows(family, answers):
            # 긴 질문/메모는 셀 안에서 줄바꿈되도록 Paragraph로 감싼다.
            data.append([Paragraph(escape(row[0]), cell_style)] + row[1:-1] + [Paragraph(escape(row[-1]), cell_style)])
        if family_type == QuestionType.TYPE_1:
            col_widths = [70 * mm, 22 * mm, 16 * mm, 16 * mm, 16 * mm, None]
        else:
            col_widths = [90 * mm, 26 * mm, 22 * mm, None]
        table = Table(data, colWidths=col_widths, repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("ALIGN", (1, 1), (-2, -1), "CENTER"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]))
        story.append(table)
        story.append(Spacer(1, 4 * mm))

    doc.build(story, onFirstPage=_draw_page_number, onLaterPages=_draw_page_number)
    return buffer.getvalue()
