from .auth import router as auth_router
from .clientes import router as clientes_router
from .servicos import router as servicos_router
from .tipos_servico import router as tipos_servico_router
from .status_servico import router as status_servico_router
from .relatorios import router as relatorios_router
from .painel import router as painel_router

__all__ = [
    "auth_router",
    "clientes_router",
    "servicos_router",
    "tipos_servico_router",
    "status_servico_router",
    "relatorios_router",
    "painel_router"
]
