"""
Gestão de OS - Serviço Model
Ordem de serviço e histórico de mudanças de status
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


def _money(value):
    return float(value) if value is not None else None


def _iso(value):
    return value.isoformat() if value else None


class Servico(Base):
    """Ordem de serviço (OS)"""
    __tablename__ = "servicos"

    id_servico = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    id_cliente = Column(String(36), ForeignKey("clientes.id_cliente"), nullable=False, index=True)
    id_tipo_servico = Column(String(36), ForeignKey("tipos_servico.id_tipo_servico"), nullable=False)
    id_status_atual = Column(String(36), ForeignKey("status_servico.id_status_servico"), nullable=False, index=True)

    # Problema e equipamento
    descricao_problema = Column(Text, nullable=False)
    equipamento_descricao = Column(String(255))
    equipamento_marca = Column(String(100))
    equipamento_modelo = Column(String(100))
    equipamento_num_serie = Column(String(100))

    # Datas
    data_entrada = Column(DateTime, default=datetime.utcnow, index=True)
    data_previsao_saida = Column(DateTime)
    data_efetiva_saida = Column(DateTime, index=True)

    # Valores
    valor_servico = Column(Numeric(10, 2))
    valor_pecas = Column(Numeric(10, 2))
    valor_mao_de_obra = Column(Numeric(10, 2))

    descricao_solucao = Column(Text)
    observacoes_internas = Column(Text)

    # Timestamps
    data_criacao = Column(DateTime, default=datetime.utcnow)
    data_atualizacao = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relacionamentos
    cliente = relationship("Cliente", lazy="selectin")
    tipo_servico = relationship("TipoServico", lazy="selectin")
    status_atual = relationship("StatusServico", lazy="selectin")
    historico = relationship(
        "HistoricoServico",
        back_populates="servico",
        cascade="all, delete-orphan",
        order_by=lambda: HistoricoServico.data_alteracao.desc(),
        lazy="selectin"
    )

    def to_dict(self):
        return {
            "id_servico": self.id_servico,
            "id_cliente": self.id_cliente,
            "id_tipo_servico": self.id_tipo_servico,
            "id_status_atual": self.id_status_atual,
            "descricao_problema": self.descricao_problema,
            "equipamento_descricao": self.equipamento_descricao,
            "equipamento_marca": self.equipamento_marca,
            "equipamento_modelo": self.equipamento_modelo,
            "equipamento_num_serie": self.equipamento_num_serie,
            "data_entrada": _iso(self.data_entrada),
            "data_previsao_saida": _iso(self.data_previsao_saida),
            "data_efetiva_saida": _iso(self.data_efetiva_saida),
            "valor_servico": _money(self.valor_servico),
            "valor_pecas": _money(self.valor_pecas),
            "valor_mao_de_obra": _money(self.valor_mao_de_obra),
            "descricao_solucao": self.descricao_solucao,
            "observacoes_internas": self.observacoes_internas,
            "data_criacao": _iso(self.data_criacao),
            "data_atualizacao": _iso(self.data_atualizacao),
        }

    def to_list_item(self):
        """Formato usado nas listagens paginadas"""
        data = self.to_dict()
        data["cliente"] = self.cliente.to_summary() if self.cliente else None
        data["tipo_servico"] = {
            "id_tipo_servico": self.tipo_servico.id_tipo_servico,
            "nome_tipo_servico": self.tipo_servico.nome_tipo_servico,
        } if self.tipo_servico else None
        data["status_atual"] = {
            "id_status_servico": self.status_atual.id_status_servico,
            "nome_status": self.status_atual.nome_status,
        } if self.status_atual else None
        return data

    def to_detail(self):
        """Formato completo com cliente, catálogos e histórico"""
        data = self.to_dict()
        if self.cliente:
            data["cliente"] = {
                **self.cliente.to_summary(),
                "email": self.cliente.email,
                "telefone_principal": self.cliente.telefone_principal,
            }
        else:
            data["cliente"] = None
        data["tipo_servico"] = self.tipo_servico.to_dict() if self.tipo_servico else None
        data["status_atual"] = self.status_atual.to_dict() if self.status_atual else None
        data["historico"] = [h.to_dict() for h in self.historico]
        return data


class HistoricoServico(Base):
    """Registro de mudança de status de uma OS"""
    __tablename__ = "historico_servicos"

    id_historico_servico = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    id_servico = Column(
        String(36),
        ForeignKey("servicos.id_servico", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    id_status_anterior = Column(String(36), ForeignKey("status_servico.id_status_servico"))
    id_status_novo = Column(String(36), ForeignKey("status_servico.id_status_servico"), nullable=False)
    data_alteracao = Column(DateTime, default=datetime.utcnow, nullable=False)
    observacao = Column(Text)

    servico = relationship("Servico", back_populates="historico")
    status_anterior = relationship("StatusServico", foreign_keys=[id_status_anterior], lazy="selectin")
    status_novo = relationship("StatusServico", foreign_keys=[id_status_novo], lazy="selectin")

    def to_dict(self):
        return {
            "id_historico_servico": self.id_historico_servico,
            "id_servico": self.id_servico,
            "id_status_anterior": self.id_status_anterior,
            "status_anterior": {"nome_status": self.status_anterior.nome_status} if self.status_anterior else None,
            "id_status_novo": self.id_status_novo,
            "status_novo": {"nome_status": self.status_novo.nome_status} if self.status_novo else None,
            "data_alteracao": _iso(self.data_alteracao),
            "observacao": self.observacao,
        }
