from .cliente import Cliente, TipoPessoa, CAMPOS_PESSOA_FISICA, CAMPOS_PESSOA_JURIDICA
from .catalogo import TipoServico, StatusServico
from .servico import Servico, HistoricoServico
from .usuario import Usuario

__all__ = [
    "Cliente",
    "TipoPessoa",
    "CAMPOS_PESSOA_FISICA",
    "CAMPOS_PESSOA_JURIDICA",
    "TipoServico",
    "StatusServico",
    "Servico",
    "HistoricoServico",
    "Usuario"
]
