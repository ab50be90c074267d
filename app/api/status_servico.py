"""
Gestão de OS - Status de Serviço API
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.core import settings
from app.database import get_db
from app.models import StatusServico
from app.schemas import StatusServicoCreate, StatusServicoUpdate, StatusServicoResponse
from app.api.auth import get_current_user
from app.api.pagination import PageParams, page_params, paginate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/status-servico",
    tags=["Status de Serviço"],
    dependencies=[Depends(get_current_user)]
)


async def _get_status_or_404(db: AsyncSession, id_status_servico: str) -> StatusServico:
    status_servico = await db.get(StatusServico, id_status_servico)
    if not status_servico:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Status de serviço não encontrado."
        )
    return status_servico


async def _ensure_nome_unico(db: AsyncSession, nome: str, exclude_id: Optional[str] = None):
    query = select(StatusServico.id_status_servico).where(StatusServico.nome_status == nome)
    if exclude_id:
        query = query.where(StatusServico.id_status_servico != exclude_id)
    result = await db.execute(query.limit(1))
    if result.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Já existe um status com este nome."
        )


async def _commit_or_409(db: AsyncSession):
    """Unicidade do nome também é garantida pelo índice único do banco"""
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("Conflito de unicidade no nome do status de serviço")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Já existe um status com este nome."
        )


@router.get("")
async def list_status_servico(
    search: Optional[str] = Query(None),
    pagination: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db)
):
    """Lista status ativos na ordem do fluxo"""
    query = select(StatusServico).where(StatusServico.ativo == True)

    if search:
        query = query.where(StatusServico.nome_status.icontains(search, autoescape=True))

    # Status sem ordem definida vão para o fim
    query = query.order_by(
        StatusServico.ordem.is_(None),
        StatusServico.ordem,
        StatusServico.nome_status
    )

    return await paginate(db, query, pagination)


@router.get("/{id_status_servico}", response_model=StatusServicoResponse)
async def get_status_servico(id_status_servico: str, db: AsyncSession = Depends(get_db)):
    status_servico = await _get_status_or_404(db, id_status_servico)
    return status_servico.to_dict()


@router.post("", response_model=StatusServicoResponse, status_code=status.HTTP_201_CREATED)
async def create_status_servico(payload: StatusServicoCreate, db: AsyncSession = Depends(get_db)):
    await _ensure_nome_unico(db, payload.nome_status)

    status_servico = StatusServico(**payload.model_dump())
    db.add(status_servico)
    await _commit_or_409(db)
    await db.refresh(status_servico)
    return status_servico.to_dict()


@router.put("/{id_status_servico}", response_model=StatusServicoResponse)
async def update_status_servico(
    id_status_servico: str,
    payload: StatusServicoUpdate,
    db: AsyncSession = Depends(get_db)
):
    status_servico = await _get_status_or_404(db, id_status_servico)

    if status_servico.nome_status == settings.INITIAL_STATUS_NAME and (
        payload.nome_status != status_servico.nome_status or payload.ativo is False
    ):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="O status inicial das ordens de serviço não pode ser renomeado nem desativado."
        )

    if payload.nome_status != status_servico.nome_status:
        await _ensure_nome_unico(db, payload.nome_status, exclude_id=id_status_servico)

    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "ativo" and value is None:
            continue
        setattr(status_servico, field, value)

    await _commit_or_409(db)
    await db.refresh(status_servico)
    return status_servico.to_dict()


@router.delete("/{id_status_servico}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_status_servico(id_status_servico: str, db: AsyncSession = Depends(get_db)):
    """Desativa o status; o status inicial das OS não pode ser removido"""
    status_servico = await _get_status_or_404(db, id_status_servico)

    if status_servico.nome_status == settings.INITIAL_STATUS_NAME:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="O status inicial das ordens de serviço não pode ser removido."
        )

    status_servico.ativo = False
    await db.commit()

    logger.info(f"Status {status_servico.nome_status} desativado")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
