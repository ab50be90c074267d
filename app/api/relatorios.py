"""
Gestão de OS - Relatórios API
Faturamento e serviços por status em JSON, CSV ou PDF
"""
import enum
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core import settings
from app.database import get_db
from app.models import Servico, Cliente, StatusServico
from app.schemas.common import to_naive_utc
from app.api.auth import get_current_user
from app.utils.report_generator import (
    generate_faturamento_csv,
    generate_faturamento_pdf,
    generate_servicos_status_csv,
    generate_servicos_status_pdf
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/relatorios",
    tags=["Relatórios"],
    dependencies=[Depends(get_current_user)]
)


class FormatoRelatorio(str, enum.Enum):
    JSON = "json"
    CSV = "csv"
    PDF = "pdf"


class FiltroTipoPessoa(str, enum.Enum):
    FISICA = "FISICA"
    JURIDICA = "JURIDICA"
    TODOS = "TODOS"


def _attachment(content, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        }
    )


def _faturamento_item(servico: Servico) -> dict:
    item = servico.to_list_item()
    if item["cliente"] is not None:
        item["cliente"]["email"] = servico.cliente.email
    return item


@router.get("/faturamento")
async def relatorio_faturamento(
    data_inicio: datetime = Query(...),
    data_fim: datetime = Query(...),
    tipo_pessoa_cliente: FiltroTipoPessoa = Query(FiltroTipoPessoa.TODOS),
    formato: FormatoRelatorio = Query(FormatoRelatorio.JSON),
    db: AsyncSession = Depends(get_db)
):
    """Serviços com saída efetiva no período e valor maior que zero"""
    inicio = to_naive_utc(data_inicio)
    fim = to_naive_utc(data_fim)
    if inicio > fim:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Data de início deve ser anterior à data de fim."
        )

    query = (
        select(Servico)
        .join(Cliente, Servico.id_cliente == Cliente.id_cliente)
        .where(
            Servico.data_efetiva_saida >= inicio,
            Servico.data_efetiva_saida <= fim,
            Servico.valor_servico > 0
        )
    )
    if tipo_pessoa_cliente != FiltroTipoPessoa.TODOS:
        query = query.where(Cliente.tipo_pessoa == tipo_pessoa_cliente.value)
    query = query.order_by(Servico.data_efetiva_saida)

    result = await db.execute(query)
    servicos = result.scalars().all()

    total_faturado = round(sum(float(s.valor_servico or 0) for s in servicos), 2)
    periodo = f"{inicio:%Y-%m-%d}_a_{fim:%Y-%m-%d}"

    if formato == FormatoRelatorio.CSV:
        content = generate_faturamento_csv(servicos, total_faturado)
        return _attachment(content, "text/csv; charset=utf-8", f"relatorio_faturamento_{periodo}.csv")

    if formato == FormatoRelatorio.PDF:
        content = generate_faturamento_pdf(
            servicos, total_faturado, inicio, fim,
            tipo_pessoa_cliente.value, company_name=settings.COMPANY_NAME
        )
        return _attachment(content, "application/pdf", f"relatorio_faturamento_{periodo}.pdf")

    return {
        "data": [_faturamento_item(s) for s in servicos],
        "totalFaturado": total_faturado,
        "periodo": {"inicio": inicio.isoformat(), "fim": fim.isoformat()},
        "filtro_tipo_cliente": tipo_pessoa_cliente.value,
    }


@router.get("/servicos-status")
async def relatorio_servicos_status(
    status_id: Optional[str] = Query(None),
    data_inicio: Optional[datetime] = Query(None),
    data_fim: Optional[datetime] = Query(None),
    formato: FormatoRelatorio = Query(FormatoRelatorio.JSON),
    db: AsyncSession = Depends(get_db)
):
    """Serviços por data de entrada, opcionalmente filtrados pelo status atual"""
    inicio = to_naive_utc(data_inicio)
    fim = to_naive_utc(data_fim)

    query = select(Servico)
    if status_id:
        query = query.where(Servico.id_status_atual == status_id)
    if inicio:
        query = query.where(Servico.data_entrada >= inicio)
    if fim:
        query = query.where(Servico.data_entrada <= fim)
    query = query.order_by(Servico.data_entrada)

    result = await db.execute(query)
    servicos = result.scalars().all()

    hoje = datetime.utcnow().strftime("%Y-%m-%d")

    if formato == FormatoRelatorio.CSV:
        content = generate_servicos_status_csv(servicos)
        return _attachment(content, "text/csv; charset=utf-8", f"relatorio_servicos_status_{hoje}.csv")

    if formato == FormatoRelatorio.PDF:
        status_nome = None
        if status_id:
            status_servico = await db.get(StatusServico, status_id)
            status_nome = status_servico.nome_status if status_servico else status_id
        content = generate_servicos_status_pdf(
            servicos, inicio, fim, status_nome, company_name=settings.COMPANY_NAME
        )
        return _attachment(content, "application/pdf", f"relatorio_servicos_status_{hoje}.pdf")

    return [s.to_list_item() for s in servicos]
