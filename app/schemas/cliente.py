"""
Gestão de OS - Cliente Schemas
"""
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional

from app.models.cliente import TipoPessoa
from .common import blank_to_none

_OPCIONAIS = (
    "nome_completo", "cpf", "razao_social", "nome_fantasia", "cnpj",
    "inscricao_estadual", "inscricao_municipal", "nome_contato_pj",
    "telefone_secundario", "cep", "rua", "numero", "complemento",
    "bairro", "cidade", "estado_uf", "observacoes",
)


def validar_campos_obrigatorios(tipo_pessoa, nome_completo, cpf, razao_social, cnpj):
    """Regras de obrigatoriedade por tipo de pessoa"""
    if tipo_pessoa == TipoPessoa.FISICA:
        if not nome_completo:
            raise ValueError("Nome completo é obrigatório para pessoa física.")
        if not cpf:
            raise ValueError("CPF é obrigatório para pessoa física.")
    elif tipo_pessoa == TipoPessoa.JURIDICA:
        if not razao_social:
            raise ValueError("Razão Social é obrigatória para pessoa jurídica.")
        if not cnpj:
            raise ValueError("CNPJ é obrigatório para pessoa jurídica.")


class ClienteCreate(BaseModel):
    tipo_pessoa: TipoPessoa
    nome_completo: Optional[str] = Field(None, max_length=255)
    cpf: Optional[str] = Field(None, max_length=14)
    razao_social: Optional[str] = Field(None, max_length=255)
    nome_fantasia: Optional[str] = Field(None, max_length=255)
    cnpj: Optional[str] = Field(None, max_length=18)
    inscricao_estadual: Optional[str] = Field(None, max_length=30)
    inscricao_municipal: Optional[str] = Field(None, max_length=30)
    nome_contato_pj: Optional[str] = Field(None, max_length=255)
    telefone_principal: str = Field(..., min_length=1, max_length=20)
    telefone_secundario: Optional[str] = Field(None, max_length=20)
    email: EmailStr
    cep: Optional[str] = Field(None, max_length=9)
    rua: Optional[str] = Field(None, max_length=255)
    numero: Optional[str] = Field(None, max_length=20)
    complemento: Optional[str] = Field(None, max_length=100)
    bairro: Optional[str] = Field(None, max_length=100)
    cidade: Optional[str] = Field(None, max_length=100)
    estado_uf: Optional[str] = Field(None, max_length=2)
    observacoes: Optional[str] = None

    @field_validator(*_OPCIONAIS, mode="before")
    @classmethod
    def vazio_para_none(cls, value):
        return blank_to_none(value)

    @model_validator(mode="after")
    def check_tipo_pessoa(self):
        validar_campos_obrigatorios(
            self.tipo_pessoa, self.nome_completo, self.cpf, self.razao_social, self.cnpj
        )
        return self


class ClienteUpdate(BaseModel):
    tipo_pessoa: Optional[TipoPessoa] = None
    nome_completo: Optional[str] = Field(None, max_length=255)
    cpf: Optional[str] = Field(None, max_length=14)
    razao_social: Optional[str] = Field(None, max_length=255)
    nome_fantasia: Optional[str] = Field(None, max_length=255)
    cnpj: Optional[str] = Field(None, max_length=18)
    inscricao_estadual: Optional[str] = Field(None, max_length=30)
    inscricao_municipal: Optional[str] = Field(None, max_length=30)
    nome_contato_pj: Optional[str] = Field(None, max_length=255)
    telefone_principal: Optional[str] = Field(None, min_length=1, max_length=20)
    telefone_secundario: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    cep: Optional[str] = Field(None, max_length=9)
    rua: Optional[str] = Field(None, max_length=255)
    numero: Optional[str] = Field(None, max_length=20)
    complemento: Optional[str] = Field(None, max_length=100)
    bairro: Optional[str] = Field(None, max_length=100)
    cidade: Optional[str] = Field(None, max_length=100)
    estado_uf: Optional[str] = Field(None, max_length=2)
    observacoes: Optional[str] = None
    ativo: Optional[bool] = None

    @field_validator(*_OPCIONAIS, mode="before")
    @classmethod
    def vazio_para_none(cls, value):
        return blank_to_none(value)


class ClienteResponse(BaseModel):
    id_cliente: str
    tipo_pessoa: TipoPessoa
    nome_completo: Optional[str] = None
    cpf: Optional[str] = None
    razao_social: Optional[str] = None
    nome_fantasia: Optional[str] = None
    cnpj: Optional[str] = None
    inscricao_estadual: Optional[str] = None
    inscricao_municipal: Optional[str] = None
    nome_contato_pj: Optional[str] = None
    telefone_principal: str
    telefone_secundario: Optional[str] = None
    email: str
    cep: Optional[str] = None
    rua: Optional[str] = None
    numero: Optional[str] = None
    complemento: Optional[str] = None
    bairro: Optional[str] = None
    cidade: Optional[str] = None
    estado_uf: Optional[str] = None
    observacoes: Optional[str] = None
    ativo: bool = True
    nome_exibicao: Optional[str] = None
    data_cadastro: Optional[str] = None
    data_atualizacao: Optional[str] = None

    class Config:
        from_attributes = True
