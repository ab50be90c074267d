"""
Gestão de OS - Cliente Model
Pessoas físicas e jurídicas atendidas pela assistência técnica
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Text

from app.database import Base


class TipoPessoa(str, enum.Enum):
    """Tipo de pessoa do cliente"""
    FISICA = "FISICA"
    JURIDICA = "JURIDICA"


# Campos exclusivos de cada tipo de pessoa
CAMPOS_PESSOA_FISICA = ("nome_completo", "cpf")
CAMPOS_PESSOA_JURIDICA = (
    "razao_social",
    "nome_fantasia",
    "cnpj",
    "inscricao_estadual",
    "inscricao_municipal",
    "nome_contato_pj",
)


class Cliente(Base):
    """Modelo de Cliente"""
    __tablename__ = "clientes"

    id_cliente = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tipo_pessoa = Column(String(10), nullable=False, default=TipoPessoa.FISICA.value)

    # Pessoa física
    nome_completo = Column(String(255), index=True)
    cpf = Column(String(14), unique=True, index=True)

    # Pessoa jurídica
    razao_social = Column(String(255), index=True)
    nome_fantasia = Column(String(255))
    cnpj = Column(String(18), unique=True, index=True)
    inscricao_estadual = Column(String(30))
    inscricao_municipal = Column(String(30))
    nome_contato_pj = Column(String(255))

    # Contato
    telefone_principal = Column(String(20), nullable=False)
    telefone_secundario = Column(String(20))
    email = Column(String(255), nullable=False, unique=True, index=True)

    # Endereço
    cep = Column(String(9))
    rua = Column(String(255))
    numero = Column(String(20))
    complemento = Column(String(100))
    bairro = Column(String(100))
    cidade = Column(String(100))
    estado_uf = Column(String(2))

    observacoes = Column(Text)
    ativo = Column(Boolean, default=True, nullable=False)

    # Timestamps
    data_cadastro = Column(DateTime, default=datetime.utcnow)
    data_atualizacao = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def nome_exibicao(self):
        if self.tipo_pessoa == TipoPessoa.FISICA.value:
            return self.nome_completo
        return self.razao_social

    def to_summary(self):
        return {
            "id_cliente": self.id_cliente,
            "tipo_pessoa": self.tipo_pessoa,
            "nome_completo": self.nome_completo,
            "razao_social": self.razao_social,
        }

    def to_dict(self):
        return {
            "id_cliente": self.id_cliente,
            "tipo_pessoa": self.tipo_pessoa,
            "nome_completo": self.nome_completo,
            "cpf": self.cpf,
            "razao_social": self.razao_social,
            "nome_fantasia": self.nome_fantasia,
            "cnpj": self.cnpj,
            "inscricao_estadual": self.inscricao_estadual,
            "inscricao_municipal": self.inscricao_municipal,
            "nome_contato_pj": self.nome_contato_pj,
            "telefone_principal": self.telefone_principal,
            "telefone_secundario": self.telefone_secundario,
            "email": self.email,
            "cep": self.cep,
            "rua": self.rua,
            "numero": self.numero,
            "complemento": self.complemento,
            "bairro": self.bairro,
            "cidade": self.cidade,
            "estado_uf": self.estado_uf,
            "observacoes": self.observacoes,
            "ativo": self.ativo,
            "nome_exibicao": self.nome_exibicao,
            "data_cadastro": self.data_cadastro.isoformat() if self.data_cadastro else None,
            "data_atualizacao": self.data_atualizacao.isoformat() if self.data_atualizacao else None,
        }
