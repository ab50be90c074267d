"""
Gestão de OS - Catálogos
Tabelas de apoio: tipos de serviço e status de serviço
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Text, Integer

from app.database import Base


class TipoServico(Base):
    """Tipo de serviço oferecido (formatação, troca de tela, limpeza...)"""
    __tablename__ = "tipos_servico"

    id_tipo_servico = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    nome_tipo_servico = Column(String(150), nullable=False, index=True)
    descricao = Column(Text)
    ativo = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id_tipo_servico": self.id_tipo_servico,
            "nome_tipo_servico": self.nome_tipo_servico,
            "descricao": self.descricao,
            "ativo": self.ativo,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class StatusServico(Base):
    """Status possível de uma ordem de serviço"""
    __tablename__ = "status_servico"

    id_status_servico = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    nome_status = Column(String(100), nullable=False, unique=True, index=True)
    descricao = Column(Text)
    ordem = Column(Integer)
    ativo = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id_status_servico": self.id_status_servico,
            "nome_status": self.nome_status,
            "descricao": self.descricao,
            "ordem": self.ordem,
            "ativo": self.ativo,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
