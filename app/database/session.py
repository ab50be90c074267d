"""
Gestão de OS - Database Session
"""
import logging
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from sqlalchemy import select

from app.core.config import settings

logger = logging.getLogger(__name__)

# SQLite não se beneficia de pool de conexões
_engine_kwargs = {"echo": settings.DEBUG}
if settings.DATABASE_URL.startswith("sqlite"):
    _engine_kwargs["poolclass"] = NullPool
else:
    _engine_kwargs["pool_pre_ping"] = True

# Engine assíncrono
engine = create_async_engine(settings.DATABASE_URL, **_engine_kwargs)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

# Base para models
Base = declarative_base()

# Fluxo padrão de uma OS na bancada
DEFAULT_STATUS = [
    ("Pendente", "Equipamento recebido, aguardando análise", 1),
    ("Em Análise", "Diagnóstico em andamento", 2),
    ("Aguardando Peças", "Reparo parado aguardando peças", 3),
    ("Em Execução", "Reparo em andamento", 4),
    ("Concluído", "Serviço finalizado, aguardando retirada", 5),
    ("Entregue", "Equipamento entregue ao cliente", 6),
    ("Cancelado", "Serviço cancelado", 7),
]


async def get_db() -> AsyncSession:
    """Dependency para injetar sessão do banco"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def seed_default_status():
    """
    Cadastra os status padrão quando a tabela está vazia.

    A criação de OS depende do status inicial (INITIAL_STATUS_NAME), então
    um banco novo já sai utilizável.
    """
    from app.models import StatusServico

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(StatusServico.id_status_servico).limit(1))
        if result.first():
            return

        for nome, descricao, ordem in DEFAULT_STATUS:
            session.add(StatusServico(nome_status=nome, descricao=descricao, ordem=ordem))
        await session.commit()
        logger.info(f"{len(DEFAULT_STATUS)} status de serviço padrão cadastrados")


async def init_db():
    """Inicializa banco de dados (cria tabelas) e cadastra status padrão"""
    import app.models  # noqa: F401 - registra as tabelas no metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.SEED_DEFAULT_STATUS:
        await seed_default_status()
