"""
Configuração dos testes da Gestão de OS
"""
import os
import sqlite3
import tempfile
from contextlib import closing
from pathlib import Path

# Banco de teste e settings precisam existir antes de importar a aplicação
_TMP_DIR = Path(tempfile.mkdtemp(prefix="gestao_os_tests_"))
DB_PATH = _TMP_DIR / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "chave-de-teste"
os.environ["AUTH_ENABLED"] = "true"
os.environ["SEED_DEFAULT_STATUS"] = "true"

import pytest
from fastapi.testclient import TestClient

from app.core import settings
from app.main import app

USUARIO = {"name": "Técnico Teste", "email": "tecnico@oficina.com", "password": "senha123"}


@pytest.fixture(scope="function")
def client():
    """Cliente HTTP sem autenticação, com banco novo a cada teste"""
    DB_PATH.unlink(missing_ok=True)
    with TestClient(app) as test_client:
        yield test_client
    DB_PATH.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def api(client):
    """Cliente HTTP já logado (cookie de sessão)"""
    response = client.post("/api/auth/register", json=USUARIO)
    assert response.status_code == 201
    response = client.post(
        "/api/auth/login",
        json={"email": USUARIO["email"], "password": USUARIO["password"]}
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def novo_cliente(api):
    """Factory de clientes pessoa física"""
    contador = {"n": 0}

    def _create(**overrides):
        contador["n"] += 1
        n = contador["n"]
        body = {
            "tipo_pessoa": "FISICA",
            "nome_completo": f"Cliente {n}",
            "cpf": f"000.000.000-{n:02d}",
            "telefone_principal": "(11) 99999-0000",
            "email": f"cliente{n}@email.com",
        }
        body.update(overrides)
        response = api.post("/api/clientes", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def novo_tipo(api):
    """Factory de tipos de serviço"""
    def _create(nome="Formatação", descricao="Formatação e reinstalação do sistema"):
        response = api.post(
            "/api/tipos-servico",
            json={"nome_tipo_servico": nome, "descricao": descricao}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def novo_servico(api, novo_cliente, novo_tipo):
    """Factory de ordens de serviço"""
    def _create(cliente=None, tipo=None, **overrides):
        cliente = cliente or novo_cliente()
        tipo = tipo or novo_tipo()
        body = {
            "id_cliente": cliente["id_cliente"],
            "id_tipo_servico": tipo["id_tipo_servico"],
            "descricao_problema": "Notebook não liga",
            "equipamento_descricao": "Notebook",
            "equipamento_marca": "Dell",
        }
        body.update(overrides)
        response = api.post("/api/servicos", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def status_por_nome(api):
    """Mapa nome -> id dos status cadastrados"""
    def _lookup():
        response = api.get("/api/status-servico", params={"limit": 100})
        assert response.status_code == 200
        return {s["nome_status"]: s["id_status_servico"] for s in response.json()["data"]}

    return _lookup


@pytest.fixture(scope="function")
def api_sem_status(monkeypatch):
    """Banco novo sem os status padrão e com autenticação desativada"""
    monkeypatch.setattr(settings, "SEED_DEFAULT_STATUS", False)
    monkeypatch.setattr(settings, "AUTH_ENABLED", False)
    DB_PATH.unlink(missing_ok=True)
    with TestClient(app) as test_client:
        yield test_client
    DB_PATH.unlink(missing_ok=True)


@pytest.fixture
def contar_historico():
    """Conta as linhas de historico_servicos de uma OS direto no SQLite"""
    def _count(id_servico):
        with closing(sqlite3.connect(DB_PATH)) as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM historico_servicos WHERE id_servico = ?",
                (id_servico,)
            ).fetchone()
        return row[0]

    return _count
