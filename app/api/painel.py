"""
Gestão de OS - Painel API
Indicadores para a tela inicial
"""
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.database import get_db
from app.models import Cliente, Servico, StatusServico
from app.api.auth import get_current_user

router = APIRouter(
    prefix="/painel",
    tags=["Painel"],
    dependencies=[Depends(get_current_user)]
)


@router.get("/resumo")
async def get_resumo(db: AsyncSession = Depends(get_db)):
    """Contadores de clientes, OS por status e faturamento do mês"""
    now = datetime.utcnow()

    result = await db.execute(
        select(func.count(Cliente.id_cliente)).where(Cliente.ativo == True)
    )
    clientes_ativos = result.scalar() or 0

    result = await db.execute(select(func.count(Servico.id_servico)))
    total_servicos = result.scalar() or 0

    # OS por status atual
    result = await db.execute(
        select(StatusServico.nome_status, func.count(Servico.id_servico))
        .join(Servico, Servico.id_status_atual == StatusServico.id_status_servico)
        .group_by(StatusServico.nome_status)
    )
    por_status = {row[0]: row[1] for row in result.all()}

    # Entradas nos últimos 30 dias
    result = await db.execute(
        select(func.count(Servico.id_servico)).where(
            Servico.data_entrada >= now - timedelta(days=30)
        )
    )
    entradas_30_dias = result.scalar() or 0

    # Faturamento do mês corrente (saída efetiva)
    inicio_mes = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    result = await db.execute(
        select(func.coalesce(func.sum(Servico.valor_servico), 0)).where(
            Servico.data_efetiva_saida >= inicio_mes,
            Servico.valor_servico > 0
        )
    )
    faturamento_mes = float(result.scalar() or 0)

    return {
        "clientes": {
            "ativos": clientes_ativos
        },
        "servicos": {
            "total": total_servicos,
            "por_status": por_status,
            "entradas_30_dias": entradas_30_dias
        },
        "faturamento_mes": round(faturamento_mes, 2),
        "generated_at": now.isoformat()
    }
