from .cliente import ClienteCreate, ClienteUpdate, ClienteResponse, validar_campos_obrigatorios
from .servico import ServicoCreate, ServicoUpdate
from .catalogo import (
    TipoServicoCreate,
    TipoServicoUpdate,
    TipoServicoResponse,
    StatusServicoCreate,
    StatusServicoUpdate,
    StatusServicoResponse
)
from .auth import RegisterRequest, LoginRequest, LoginResponse, UsuarioResponse

__all__ = [
    "ClienteCreate",
    "ClienteUpdate",
    "ClienteResponse",
    "validar_campos_obrigatorios",
    "ServicoCreate",
    "ServicoUpdate",
    "TipoServicoCreate",
    "TipoServicoUpdate",
    "TipoServicoResponse",
    "StatusServicoCreate",
    "StatusServicoUpdate",
    "StatusServicoResponse",
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    "UsuarioResponse"
]
