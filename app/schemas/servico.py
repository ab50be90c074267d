"""
Gestão de OS - Serviço Schemas
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from .common import to_naive_utc


class ServicoCreate(BaseModel):
    id_cliente: str = Field(..., min_length=1, max_length=36)
    id_tipo_servico: str = Field(..., min_length=1, max_length=36)
    descricao_problema: str = Field(..., min_length=1)
    equipamento_descricao: Optional[str] = Field(None, max_length=255)
    equipamento_marca: Optional[str] = Field(None, max_length=100)
    equipamento_modelo: Optional[str] = Field(None, max_length=100)
    equipamento_num_serie: Optional[str] = Field(None, max_length=100)
    data_previsao_saida: Optional[datetime] = None
    valor_servico: Optional[float] = Field(None, ge=0)
    valor_pecas: Optional[float] = Field(None, ge=0)
    valor_mao_de_obra: Optional[float] = Field(None, ge=0)
    descricao_solucao: Optional[str] = None
    observacoes_internas: Optional[str] = None

    @field_validator("data_previsao_saida")
    @classmethod
    def normaliza_data(cls, value):
        return to_naive_utc(value)


class ServicoUpdate(BaseModel):
    id_cliente: Optional[str] = Field(None, min_length=1, max_length=36)
    id_tipo_servico: Optional[str] = Field(None, min_length=1, max_length=36)
    id_status_atual: Optional[str] = Field(None, min_length=1, max_length=36)
    descricao_problema: Optional[str] = Field(None, min_length=1)
    equipamento_descricao: Optional[str] = Field(None, max_length=255)
    equipamento_marca: Optional[str] = Field(None, max_length=100)
    equipamento_modelo: Optional[str] = Field(None, max_length=100)
    equipamento_num_serie: Optional[str] = Field(None, max_length=100)
    data_previsao_saida: Optional[datetime] = None
    data_efetiva_saida: Optional[datetime] = None
    valor_servico: Optional[float] = Field(None, ge=0)
    valor_pecas: Optional[float] = Field(None, ge=0)
    valor_mao_de_obra: Optional[float] = Field(None, ge=0)
    descricao_solucao: Optional[str] = None
    observacoes_internas: Optional[str] = None

    # Não é coluna: vai para a observação do histórico quando o status muda
    observacao_mudanca_status: Optional[str] = None

    @field_validator("data_previsao_saida", "data_efetiva_saida")
    @classmethod
    def normaliza_data(cls, value):
        return to_naive_utc(value)
