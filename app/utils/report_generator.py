# [ Imports ]
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.lib.colors import HexColor
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from datetime import datetime
from decimal import Decimal
from io import BytesIO, StringIO
import csv
import logging

logger = logging.getLogger(__name__)


# ==========================================
# CONFIGURAÇÕES DE DESIGN DOS RELATÓRIOS
# ==========================================
class ReportDesign:
    TITLE = '#1a202c'
    TEXT = '#222222'
    SUBTLE = '#333333'
    HEADER_BG = '#e2e8f0'
    ROW_BG_1 = '#ffffff'
    ROW_BG_2 = '#f7fafc'
    LINE = '#cbd5e1'

    FONT_BOLD = "Helvetica-Bold"
    FONT_REGULAR = "Helvetica"

    MARGIN = 1.4*cm


# ==========================================
# FORMATAÇÃO
# ==========================================

def formatar_data(value) -> str:
    """dd/mm/aaaa, vazio quando não há data"""
    if not value:
        return ""
    return value.strftime("%d/%m/%Y")


def formatar_valor(value) -> str:
    """Valor com duas casas e ponto decimal (formato do CSV)"""
    return f"{Decimal(str(value or 0)):.2f}"


def formatar_moeda(value) -> str:
    """R$ 1.234,56"""
    texto = f"{Decimal(str(value or 0)):,.2f}"
    return "R$ " + texto.replace(",", "X").replace(".", ",").replace("X", ".")


def nome_cliente(servico) -> str:
    cliente = servico.cliente
    if not cliente:
        return "N/A"
    return cliente.nome_exibicao or "N/A"


def _tipo_servico(servico) -> str:
    return servico.tipo_servico.nome_tipo_servico if servico.tipo_servico else "N/A"


# ==========================================
# CSV
# ==========================================

def _csv_writer(buffer):
    return csv.writer(buffer, delimiter=";", lineterminator="\n")


def generate_faturamento_csv(servicos, total_faturado) -> str:
    """CSV do relatório de faturamento, com linha de total ao final"""
    buffer = StringIO()
    writer = _csv_writer(buffer)
    writer.writerow(["OS", "Data Saida", "Cliente", "Tipo Pessoa", "Email Cliente", "Tipo Servico", "Valor Servico"])

    for s in servicos:
        writer.writerow([
            s.id_servico,
            formatar_data(s.data_efetiva_saida),
            nome_cliente(s),
            s.cliente.tipo_pessoa if s.cliente else "N/A",
            s.cliente.email if s.cliente else "N/A",
            _tipo_servico(s),
            formatar_valor(s.valor_servico),
        ])

    buffer.write("\n")
    writer.writerow(["Total Faturado", "", "", "", "", "", f"R$ {formatar_valor(total_faturado)}"])
    return buffer.getvalue()


def generate_servicos_status_csv(servicos) -> str:
    """CSV do relatório de serviços por status"""
    buffer = StringIO()
    writer = _csv_writer(buffer)
    writer.writerow(["OS", "Cliente", "Tipo Pessoa", "Tipo Servico", "Data Entrada", "Status Atual", "Valor Servico"])

    for s in servicos:
        writer.writerow([
            s.id_servico,
            nome_cliente(s),
            s.cliente.tipo_pessoa if s.cliente else "N/A",
            _tipo_servico(s),
            formatar_data(s.data_entrada),
            s.status_atual.nome_status if s.status_atual else "N/A",
            formatar_valor(s.valor_servico),
        ])

    return buffer.getvalue()


# ==========================================
# PDF
# ==========================================

def _styles():
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ReportTitle", parent=styles["Title"], fontName=ReportDesign.FONT_BOLD,
            fontSize=20, textColor=HexColor(ReportDesign.TITLE), alignment=TA_CENTER
        ),
        "info": ParagraphStyle(
            "ReportInfo", parent=styles["Normal"], fontName=ReportDesign.FONT_REGULAR,
            fontSize=11, textColor=HexColor(ReportDesign.SUBTLE), spaceAfter=2
        ),
        "cell": ParagraphStyle(
            "ReportCell", parent=styles["Normal"], fontName=ReportDesign.FONT_REGULAR,
            fontSize=8, leading=10, textColor=HexColor(ReportDesign.TEXT)
        ),
        "total": ParagraphStyle(
            "ReportTotal", parent=styles["Normal"], fontName=ReportDesign.FONT_BOLD,
            fontSize=13, textColor=HexColor(ReportDesign.TITLE), alignment=TA_RIGHT, spaceBefore=10
        ),
    }


def _build_table(headers, rows, col_widths, cell_style):
    """Tabela com cabeçalho cinza e linhas zebradas"""
    data = [headers] + [[Paragraph(str(cell), cell_style) for cell in row] for row in rows]
    table = Table(data, colWidths=col_widths, repeatRows=1)

    style = [
        ("BACKGROUND", (0, 0), (-1, 0), HexColor(ReportDesign.HEADER_BG)),
        ("FONTNAME", (0, 0), (-1, 0), ReportDesign.FONT_BOLD),
        ("FONTSIZE", (0, 0), (-1, 0), 9),
        ("TEXTCOLOR", (0, 0), (-1, -1), HexColor(ReportDesign.TEXT)),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LINEBELOW", (0, -1), (-1, -1), 0.8, HexColor(ReportDesign.LINE)),
    ]
    for idx in range(1, len(data)):
        bg = ReportDesign.ROW_BG_1 if idx % 2 == 1 else ReportDesign.ROW_BG_2
        style.append(("BACKGROUND", (0, idx), (-1, idx), HexColor(bg)))

    table.setStyle(TableStyle(style))
    return table


def _render(story, title) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=ReportDesign.MARGIN,
        rightMargin=ReportDesign.MARGIN,
        topMargin=ReportDesign.MARGIN,
        bottomMargin=ReportDesign.MARGIN,
        title=title
    )
    try:
        doc.build(story)
        return buffer.getvalue()
    except Exception as e:
        logger.error(f"Erro ao gerar PDF '{title}': {str(e)}")
        raise
    finally:
        buffer.close()


def generate_faturamento_pdf(servicos, total_faturado, data_inicio, data_fim, tipo_pessoa, company_name=None) -> bytes:
    """PDF do relatório de faturamento"""
    styles = _styles()
    story = []

    if company_name:
        story.append(Paragraph(company_name, styles["info"]))
    story.append(Paragraph("Relatório de Faturamento", styles["title"]))
    story.append(Paragraph(f"Período: {formatar_data(data_inicio)} a {formatar_data(data_fim)}", styles["info"]))
    story.append(Paragraph(f"Tipo de Cliente: {tipo_pessoa}", styles["info"]))
    story.append(Spacer(1, 0.5*cm))

    rows = [
        [
            s.id_servico[:8],
            formatar_data(s.data_efetiva_saida),
            nome_cliente(s),
            s.cliente.tipo_pessoa if s.cliente else "",
            _tipo_servico(s),
            formatar_moeda(s.valor_servico),
        ]
        for s in servicos
    ]
    headers = ["OS", "Data Saída", "Cliente", "Tipo", "Tipo Serviço", "Valor"]
    story.append(_build_table(headers, rows, [2*cm, 2.4*cm, 5*cm, 2.2*cm, 3.8*cm, 2.6*cm], styles["cell"]))
    story.append(Paragraph(f"Total Faturado: {formatar_moeda(total_faturado)}", styles["total"]))
    story.append(Paragraph(f"Gerado em {datetime.now().strftime('%d/%m/%Y %H:%M')}", styles["info"]))

    pdf_bytes = _render(story, "Relatório de Faturamento")
    logger.info(f"Relatório de faturamento gerado - {len(servicos)} OS, total {formatar_moeda(total_faturado)}")
    return pdf_bytes


def generate_servicos_status_pdf(servicos, data_inicio=None, data_fim=None, status_nome=None, company_name=None) -> bytes:
    """PDF do relatório de serviços por status"""
    styles = _styles()
    story = []

    if company_name:
        story.append(Paragraph(company_name, styles["info"]))
    story.append(Paragraph("Relatório de Serviços por Status", styles["title"]))

    if data_inicio and data_fim:
        story.append(Paragraph(f"Período: {formatar_data(data_inicio)} a {formatar_data(data_fim)}", styles["info"]))
    elif data_inicio:
        story.append(Paragraph(f"A partir de: {formatar_data(data_inicio)}", styles["info"]))
    elif data_fim:
        story.append(Paragraph(f"Até: {formatar_data(data_fim)}", styles["info"]))
    if status_nome:
        story.append(Paragraph(f"Status filtrado: {status_nome}", styles["info"]))
    story.append(Spacer(1, 0.5*cm))

    rows = [
        [
            s.id_servico[:8],
            nome_cliente(s),
            s.cliente.tipo_pessoa if s.cliente else "",
            _tipo_servico(s),
            formatar_data(s.data_entrada),
            s.status_atual.nome_status if s.status_atual else "",
            formatar_moeda(s.valor_servico),
        ]
        for s in servicos
    ]
    headers = ["OS", "Cliente", "Tipo Pessoa", "Tipo Serviço", "Data Entrada", "Status", "Valor"]
    story.append(_build_table(headers, rows, [1.8*cm, 4.2*cm, 2*cm, 3*cm, 2.3*cm, 2.7*cm, 2.2*cm], styles["cell"]))
    story.append(Paragraph(f"Total de Serviços: {len(servicos)}", styles["total"]))

    pdf_bytes = _render(story, "Relatório de Serviços por Status")
    logger.info(f"Relatório de serviços por status gerado - {len(servicos)} OS")
    return pdf_bytes
