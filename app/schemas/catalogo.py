"""
Gestão de OS - Schemas de catálogos (tipos e status de serviço)
"""
from pydantic import BaseModel, Field
from typing import Optional


class TipoServicoCreate(BaseModel):
    nome_tipo_servico: str = Field(..., min_length=1, max_length=150)
    descricao: str = Field(..., min_length=1)


class TipoServicoUpdate(TipoServicoCreate):
    ativo: Optional[bool] = None


class TipoServicoResponse(BaseModel):
    id_tipo_servico: str
    nome_tipo_servico: str
    descricao: Optional[str] = None
    ativo: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    class Config:
        from_attributes = True


class StatusServicoCreate(BaseModel):
    nome_status: str = Field(..., min_length=1, max_length=100)
    descricao: Optional[str] = None
    ordem: Optional[int] = Field(None, ge=0)


class StatusServicoUpdate(BaseModel):
    nome_status: str = Field(..., min_length=1, max_length=100)
    descricao: str = Field(..., min_length=1)
    ordem: Optional[int] = Field(None, ge=0)
    ativo: Optional[bool] = None


class StatusServicoResponse(BaseModel):
    id_status_servico: str
    nome_status: str
    descricao: Optional[str] = None
    ordem: Optional[int] = None
    ativo: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    class Config:
        from_attributes = True
