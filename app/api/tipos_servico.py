"""
Gestão de OS - Tipos de Serviço API
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_

from app.database import get_db
from app.models import TipoServico
from app.schemas import TipoServicoCreate, TipoServicoUpdate, TipoServicoResponse
from app.api.auth import get_current_user
from app.api.pagination import PageParams, page_params, paginate

router = APIRouter(
    prefix="/tipos-servico",
    tags=["Tipos de Serviço"],
    dependencies=[Depends(get_current_user)]
)


async def _get_tipo_or_404(db: AsyncSession, id_tipo_servico: str) -> TipoServico:
    tipo = await db.get(TipoServico, id_tipo_servico)
    if not tipo:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tipo de serviço não encontrado."
        )
    return tipo


@router.get("")
async def list_tipos_servico(
    search: Optional[str] = Query(None),
    pagination: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db)
):
    """Lista tipos de serviço ativos"""
    query = select(TipoServico).where(TipoServico.ativo == True)

    if search:
        query = query.where(
            or_(
                TipoServico.nome_tipo_servico.icontains(search, autoescape=True),
                TipoServico.descricao.icontains(search, autoescape=True)
            )
        )

    query = query.order_by(TipoServico.nome_tipo_servico)

    return await paginate(db, query, pagination)


@router.get("/{id_tipo_servico}", response_model=TipoServicoResponse)
async def get_tipo_servico(id_tipo_servico: str, db: AsyncSession = Depends(get_db)):
    tipo = await _get_tipo_or_404(db, id_tipo_servico)
    return tipo.to_dict()


@router.post("", response_model=TipoServicoResponse, status_code=status.HTTP_201_CREATED)
async def create_tipo_servico(payload: TipoServicoCreate, db: AsyncSession = Depends(get_db)):
    tipo = TipoServico(**payload.model_dump())
    db.add(tipo)
    await db.commit()
    await db.refresh(tipo)
    return tipo.to_dict()


@router.put("/{id_tipo_servico}", response_model=TipoServicoResponse)
async def update_tipo_servico(
    id_tipo_servico: str,
    payload: TipoServicoUpdate,
    db: AsyncSession = Depends(get_db)
):
    tipo = await _get_tipo_or_404(db, id_tipo_servico)

    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(tipo, field, value)

    await db.commit()
    await db.refresh(tipo)
    return tipo.to_dict()


@router.delete("/{id_tipo_servico}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tipo_servico(id_tipo_servico: str, db: AsyncSession = Depends(get_db)):
    """Desativa o tipo; OS antigas continuam apontando para ele"""
    tipo = await _get_tipo_or_404(db, id_tipo_servico)
    tipo.ativo = False
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
