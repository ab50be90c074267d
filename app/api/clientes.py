"""
Gestão de OS - Clientes API
CRUD de clientes (pessoa física e jurídica)
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, or_, func

from app.database import get_db
from app.models import Cliente, Servico, TipoPessoa, CAMPOS_PESSOA_FISICA, CAMPOS_PESSOA_JURIDICA
from app.schemas import ClienteCreate, ClienteUpdate, ClienteResponse, validar_campos_obrigatorios
from app.api.auth import get_current_user
from app.api.pagination import PageParams, page_params, paginate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/clientes",
    tags=["Clientes"],
    dependencies=[Depends(get_current_user)]
)

# Campos NOT NULL: null explícito no PUT é ignorado
_NAO_ANULAVEIS = ("tipo_pessoa", "telefone_principal", "email", "ativo")


async def _get_cliente_or_404(db: AsyncSession, id_cliente: str) -> Cliente:
    result = await db.execute(
        select(Cliente).where(Cliente.id_cliente == id_cliente)
    )
    cliente = result.scalar_one_or_none()

    if not cliente:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Cliente não encontrado."
        )
    return cliente


async def _ensure_unique(
    db: AsyncSession,
    column,
    value: str,
    message: str,
    exclude_id: Optional[str] = None
):
    """Levanta 409 se outro cliente já usa o valor"""
    query = select(Cliente.id_cliente).where(column == value)
    if exclude_id:
        query = query.where(Cliente.id_cliente != exclude_id)
    result = await db.execute(query.limit(1))
    if result.first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message)


@router.get("")
async def list_clientes(
    search: Optional[str] = Query(None),
    pagination: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db)
):
    """Lista clientes ativos com paginação"""
    query = select(Cliente).where(Cliente.ativo == True)

    if search:
        query = query.where(
            or_(
                Cliente.nome_completo.icontains(search, autoescape=True),
                Cliente.razao_social.icontains(search, autoescape=True),
                Cliente.cpf.icontains(search, autoescape=True),
                Cliente.cnpj.icontains(search, autoescape=True),
                Cliente.email.icontains(search, autoescape=True)
            )
        )

    query = query.order_by(
        func.coalesce(Cliente.nome_completo, Cliente.razao_social),
        Cliente.data_cadastro
    )

    return await paginate(db, query, pagination)


@router.get("/{id_cliente}", response_model=ClienteResponse)
async def get_cliente(id_cliente: str, db: AsyncSession = Depends(get_db)):
    """Retorna um cliente específico"""
    cliente = await _get_cliente_or_404(db, id_cliente)
    return cliente.to_dict()


@router.post("", response_model=ClienteResponse, status_code=status.HTTP_201_CREATED)
async def create_cliente(payload: ClienteCreate, db: AsyncSession = Depends(get_db)):
    """Cria novo cliente"""
    data = payload.model_dump(mode="json")

    await _ensure_unique(db, Cliente.email, data["email"], "Email já cadastrado.")

    if payload.tipo_pessoa == TipoPessoa.FISICA:
        await _ensure_unique(db, Cliente.cpf, data["cpf"], "CPF já cadastrado.")
        for campo in CAMPOS_PESSOA_JURIDICA:
            data[campo] = None
    else:
        await _ensure_unique(db, Cliente.cnpj, data["cnpj"], "CNPJ já cadastrado.")
        for campo in CAMPOS_PESSOA_FISICA:
            data[campo] = None

    cliente = Cliente(**data)
    db.add(cliente)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning(f"Conflito de unicidade ao criar cliente {data['email']}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email, CPF ou CNPJ já cadastrado."
        )
    await db.refresh(cliente)

    logger.info(f"Cliente {cliente.id_cliente} criado ({cliente.tipo_pessoa})")
    return cliente.to_dict()


@router.put("/{id_cliente}", response_model=ClienteResponse)
async def update_cliente(
    id_cliente: str,
    payload: ClienteUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Atualiza cliente"""
    cliente = await _get_cliente_or_404(db, id_cliente)

    update_data = payload.model_dump(mode="json", exclude_unset=True)
    for campo in _NAO_ANULAVEIS:
        if campo in update_data and update_data[campo] is None:
            del update_data[campo]

    novo_tipo = update_data.get("tipo_pessoa", cliente.tipo_pessoa)

    if "email" in update_data and update_data["email"] != cliente.email:
        await _ensure_unique(
            db, Cliente.email, update_data["email"],
            "Email já cadastrado para outro cliente.", exclude_id=id_cliente
        )

    if novo_tipo == TipoPessoa.FISICA.value and update_data.get("cpf") and update_data["cpf"] != cliente.cpf:
        await _ensure_unique(
            db, Cliente.cpf, update_data["cpf"],
            "CPF já cadastrado para outro cliente.", exclude_id=id_cliente
        )

    if novo_tipo == TipoPessoa.JURIDICA.value and update_data.get("cnpj") and update_data["cnpj"] != cliente.cnpj:
        await _ensure_unique(
            db, Cliente.cnpj, update_data["cnpj"],
            "CNPJ já cadastrado para outro cliente.", exclude_id=id_cliente
        )

    # Campos do outro tipo de pessoa nunca são gravados (inclusive na troca de tipo)
    campos_outro_tipo = CAMPOS_PESSOA_JURIDICA if novo_tipo == TipoPessoa.FISICA.value else CAMPOS_PESSOA_FISICA
    for campo in campos_outro_tipo:
        update_data[campo] = None

    for field, value in update_data.items():
        setattr(cliente, field, value)

    try:
        validar_campos_obrigatorios(
            TipoPessoa(cliente.tipo_pessoa),
            cliente.nome_completo,
            cliente.cpf,
            cliente.razao_social,
            cliente.cnpj
        )
    except ValueError as e:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email, CPF ou CNPJ já cadastrado para outro cliente."
        )
    await db.refresh(cliente)

    return cliente.to_dict()


@router.delete("/{id_cliente}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cliente(id_cliente: str, db: AsyncSession = Depends(get_db)):
    """Inativa cliente (soft delete) se não houver serviços vinculados"""
    cliente = await _get_cliente_or_404(db, id_cliente)

    result = await db.execute(
        select(func.count(Servico.id_servico)).where(Servico.id_cliente == id_cliente)
    )
    servicos_count = result.scalar() or 0

    if servicos_count > 0:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cliente possui serviços associados e não pode ser excluído. Considere inativá-lo."
        )

    cliente.ativo = False
    await db.commit()

    logger.info(f"Cliente {id_cliente} inativado")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
