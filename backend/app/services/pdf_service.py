"""
Service para a geração de PDF e páginas HTML com WeasyPrint + Jinja2.
Projeto: Gestor de Notas Fiscais
"""

import logging
import os

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.core.config import settings
from app.schemas.report import Report

logger = logging.getLogger(__name__)

# Caminho para a pasta dos templates
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
TEMPLATES_DIR = os.path.join(BASE_DIR, "templates")


# Import lazy do weasyprint para não falhar no arranque sem as bibliotecas GTK/Pango
def _get_weasyprint():
    """Import lazy do weasyprint."""
    try:
        from weasyprint import CSS, HTML
        return HTML, CSS
    except OSError as e:
        raise RuntimeError(
            "Dependências do WeasyPrint não encontradas. Instale as bibliotecas "
            "Pango/GTK do sistema."
        ) from e


class PdfService:
    """
    Renderiza o Report normalizado: PDF para download e HTML para a
    página pública partilhada. Os templates só desenham o que já vem
    calculado no relatório.
    """

    def __init__(self):
        self.env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=select_autoescape(["html"]),
        )

    def _context(self, report: Report) -> dict:
        return {
            "company_name": settings.report_company_name,
            "report": report,
            "summary": report.summary,
            "table": report.table,
            "generated_at": report.generated_at.strftime("%d/%m/%Y %H:%M"),
        }

    def render_report_html(self, report: Report) -> str:
        """HTML do relatório usado pelo PDF."""
        template = self.env.get_template("report_template.html")
        return template.render(self._context(report))

    def generate_report_pdf(self, report: Report) -> bytes:
        """
        Gera o PDF de um relatório.

        Args:
            report: Relatório já construído

        Returns:
            bytes: PDF binário pronto para download
        """
        HTML, CSS = _get_weasyprint()

        html_out = self.render_report_html(report)
        css = CSS(filename=os.path.join(TEMPLATES_DIR, "report_style.css"))

        pdf_bytes = HTML(string=html_out, base_url=TEMPLATES_DIR).write_pdf(stylesheets=[css])
        logger.info("PDF gerado: %s (%d bytes)", report.title, len(pdf_bytes))
        return pdf_bytes

    def render_shared_report(self, report: Report) -> str:
        """
        Página pública de um relatório partilhado.

        payments-by-month tem um layout próprio; os restantes tipos usam
        o layout geral.
        """
        template = self.env.get_template("shared_report.html")
        return template.render(self._context(report))

    def render_link_error(self, title: str, message: str) -> str:
        """Página de link inexistente ou expirado."""
        template = self.env.get_template("link_error.html")
        return template.render(
            company_name=settings.report_company_name,
            title=title,
            message=message,
        )


pdf_service = PdfService()
