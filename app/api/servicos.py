"""
Gestão de OS - Serviços API
Ordens de serviço e histórico de status
"""
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_

from app.core import settings
from app.database import get_db
from app.models import Servico, HistoricoServico, Cliente, TipoServico, StatusServico
from app.schemas import ServicoCreate, ServicoUpdate
from app.api.auth import get_current_user
from app.api.pagination import PageParams, page_params, paginate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/servicos",
    tags=["Serviços"],
    dependencies=[Depends(get_current_user)]
)

_NAO_ANULAVEIS = ("id_cliente", "id_tipo_servico", "id_status_atual", "descricao_problema")


async def _get_servico(db: AsyncSession, id_servico: str) -> Servico:
    """Carrega a OS com relacionamentos atualizados ou levanta 404"""
    result = await db.execute(
        select(Servico)
        .where(Servico.id_servico == id_servico)
        .execution_options(populate_existing=True)
    )
    servico = result.scalar_one_or_none()

    if not servico:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Serviço não encontrado."
        )
    return servico


async def _ensure_ativo(db: AsyncSession, model, pk: str, message: str):
    """Referências novas precisam existir e estar ativas"""
    registro = await db.get(model, pk)
    if registro is None or not registro.ativo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


@router.get("")
async def list_servicos(
    search: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None),
    pagination: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db)
):
    """Lista OS com busca textual e filtro por status atual"""
    query = select(Servico).outerjoin(Cliente, Servico.id_cliente == Cliente.id_cliente)

    if search:
        query = query.where(
            or_(
                Servico.id_servico.icontains(search, autoescape=True),
                Servico.descricao_problema.icontains(search, autoescape=True),
                Servico.equipamento_descricao.icontains(search, autoescape=True),
                Cliente.nome_completo.icontains(search, autoescape=True),
                Cliente.razao_social.icontains(search, autoescape=True)
            )
        )

    if status_filter:
        query = query.where(Servico.id_status_atual == status_filter)

    query = query.order_by(Servico.data_entrada.desc())

    return await paginate(db, query, pagination, serializer=lambda s: s.to_list_item())


@router.get("/{id_servico}")
async def get_servico(id_servico: str, db: AsyncSession = Depends(get_db)):
    """Retorna a OS com cliente, tipo, status e histórico"""
    servico = await _get_servico(db, id_servico)
    return servico.to_detail()


@router.get("/{id_servico}/historico")
async def get_historico(id_servico: str, db: AsyncSession = Depends(get_db)):
    """Histórico de status da OS, mais recente primeiro"""
    servico = await _get_servico(db, id_servico)
    return [h.to_dict() for h in servico.historico]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_servico(payload: ServicoCreate, db: AsyncSession = Depends(get_db)):
    """Abre nova OS no status inicial e registra o primeiro histórico"""
    await _ensure_ativo(db, Cliente, payload.id_cliente, "Cliente não encontrado.")
    await _ensure_ativo(db, TipoServico, payload.id_tipo_servico, "Tipo de serviço não encontrado.")

    result = await db.execute(
        select(StatusServico).where(StatusServico.nome_status == settings.INITIAL_STATUS_NAME)
    )
    status_inicial = result.scalars().first()
    if not status_inicial:
        logger.error(f"Status inicial '{settings.INITIAL_STATUS_NAME}' não cadastrado")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Status inicial '{settings.INITIAL_STATUS_NAME}' não encontrado. Configure os status primeiro."
        )

    servico = Servico(
        **payload.model_dump(),
        id_status_atual=status_inicial.id_status_servico,
        data_entrada=datetime.utcnow()
    )
    db.add(servico)
    await db.flush()

    db.add(HistoricoServico(
        id_servico=servico.id_servico,
        id_status_anterior=None,
        id_status_novo=status_inicial.id_status_servico,
        observacao="Serviço criado"
    ))
    await db.commit()

    logger.info(f"OS {servico.id_servico} aberta para o cliente {servico.id_cliente}")
    servico = await _get_servico(db, servico.id_servico)
    return servico.to_detail()


@router.put("/{id_servico}")
async def update_servico(
    id_servico: str,
    payload: ServicoUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Atualiza OS; mudança de status gera uma linha no histórico"""
    servico = await _get_servico(db, id_servico)

    update_data = payload.model_dump(exclude_unset=True)
    observacao = update_data.pop("observacao_mudanca_status", None)
    for campo in _NAO_ANULAVEIS:
        if campo in update_data and update_data[campo] is None:
            del update_data[campo]

    if "id_cliente" in update_data and update_data["id_cliente"] != servico.id_cliente:
        await _ensure_ativo(db, Cliente, update_data["id_cliente"], "Cliente não encontrado.")
    if "id_tipo_servico" in update_data and update_data["id_tipo_servico"] != servico.id_tipo_servico:
        await _ensure_ativo(db, TipoServico, update_data["id_tipo_servico"], "Tipo de serviço não encontrado.")

    novo_status = update_data.get("id_status_atual")
    if novo_status and novo_status != servico.id_status_atual:
        await _ensure_ativo(db, StatusServico, novo_status, "Status de serviço não encontrado.")
        db.add(HistoricoServico(
            id_servico=id_servico,
            id_status_anterior=servico.id_status_atual,
            id_status_novo=novo_status,
            observacao=observacao or "Status alterado via API"
        ))
        logger.info(f"OS {id_servico}: status {servico.id_status_atual} -> {novo_status}")

    for field, value in update_data.items():
        setattr(servico, field, value)

    await db.commit()

    servico = await _get_servico(db, id_servico)
    return servico.to_detail()


@router.delete("/{id_servico}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_servico(id_servico: str, db: AsyncSession = Depends(get_db)):
    """Remove a OS e seu histórico"""
    servico = await _get_servico(db, id_servico)

    await db.delete(servico)
    await db.commit()

    logger.info(f"OS {id_servico} removida")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
