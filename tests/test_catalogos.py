"""
Testes dos catálogos: tipos e status de serviço
"""
import app.api.status_servico as status_servico_api
from app.database.session import DEFAULT_STATUS


class TestStatusServico:
    """CRUD /api/status-servico"""

    def test_status_padrao_cadastrados(self, api):
        page = api.get("/api/status-servico", params={"limit": 100}).json()

        nomes = [s["nome_status"] for s in page["data"]]
        assert nomes == [nome for nome, _, _ in DEFAULT_STATUS]
        assert nomes[0] == "Pendente"

    def test_cria_status(self, api):
        response = api.post("/api/status-servico", json={
            "nome_status": "Aguardando Aprovação",
            "descricao": "Orçamento enviado ao cliente",
            "ordem": 3,
        })
        assert response.status_code == 201
        data = response.json()
        assert data["ativo"] is True
        assert data["ordem"] == 3

        response = api.get(f"/api/status-servico/{data['id_status_servico']}")
        assert response.status_code == 200

    def test_status_sem_ordem_vai_para_o_fim(self, api):
        api.post("/api/status-servico", json={"nome_status": "Arquivado"})

        page = api.get("/api/status-servico", params={"limit": 100}).json()
        assert page["data"][-1]["nome_status"] == "Arquivado"

    def test_nome_duplicado(self, api):
        response = api.post("/api/status-servico", json={"nome_status": "Pendente"})
        assert response.status_code == 409

    def test_renomear_para_nome_existente(self, api, status_por_nome):
        status = status_por_nome()

        response = api.put(f"/api/status-servico/{status['Entregue']}", json={
            "nome_status": "Cancelado",
            "descricao": "Duplicado",
        })
        assert response.status_code == 409

    def test_atualiza_status(self, api, status_por_nome):
        status = status_por_nome()

        response = api.put(f"/api/status-servico/{status['Entregue']}", json={
            "nome_status": "Retirado",
            "descricao": "Cliente retirou o equipamento",
            "ordem": 9,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["nome_status"] == "Retirado"
        assert data["ordem"] == 9

    def test_atualiza_sem_descricao(self, api, status_por_nome):
        status = status_por_nome()

        response = api.put(f"/api/status-servico/{status['Entregue']}", json={
            "nome_status": "Retirado",
        })
        assert response.status_code == 400

    def test_exclui_status(self, api, status_por_nome):
        status = status_por_nome()

        response = api.delete(f"/api/status-servico/{status['Cancelado']}")
        assert response.status_code == 204
        assert "Cancelado" not in status_por_nome()

        data = api.get(f"/api/status-servico/{status['Cancelado']}").json()
        assert data["ativo"] is False

    def test_status_inicial_nao_pode_ser_excluido(self, api, status_por_nome):
        response = api.delete(f"/api/status-servico/{status_por_nome()['Pendente']}")
        assert response.status_code == 409

    def test_status_inicial_nao_pode_ser_desativado(self, api, status_por_nome):
        pendente = status_por_nome()["Pendente"]

        response = api.put(f"/api/status-servico/{pendente}", json={
            "nome_status": "Pendente",
            "descricao": "Desativado",
            "ativo": False,
        })
        assert response.status_code == 409
        assert "Pendente" in status_por_nome()

    def test_status_inicial_nao_pode_ser_renomeado(self, api, status_por_nome, novo_servico):
        pendente = status_por_nome()["Pendente"]

        response = api.put(f"/api/status-servico/{pendente}", json={
            "nome_status": "Aberto",
            "descricao": "Renomeado",
        })
        assert response.status_code == 409

        # Abertura de OS continua funcionando
        assert novo_servico()["status_atual"]["nome_status"] == "Pendente"

    def test_status_inicial_aceita_nova_descricao(self, api, status_por_nome):
        pendente = status_por_nome()["Pendente"]

        response = api.put(f"/api/status-servico/{pendente}", json={
            "nome_status": "Pendente",
            "descricao": "Aguardando triagem",
            "ordem": 0,
        })
        assert response.status_code == 200
        assert response.json()["descricao"] == "Aguardando triagem"

    def test_conflito_no_banco_vira_409(self, api, monkeypatch):
        async def sem_verificacao(*args, **kwargs):
            return None

        monkeypatch.setattr(status_servico_api, "_ensure_nome_unico", sem_verificacao)

        response = api.post("/api/status-servico", json={"nome_status": "Pendente"})
        assert response.status_code == 409

        # Novos cadastros seguem funcionando depois do rollback
        response = api.post("/api/status-servico", json={"nome_status": "Em Garantia"})
        assert response.status_code == 201

    def test_busca_trata_curinga_como_texto(self, api):
        api.post("/api/status-servico", json={"nome_status": "100% Testado"})

        page = api.get("/api/status-servico", params={"search": "%"}).json()
        assert [s["nome_status"] for s in page["data"]] == ["100% Testado"]

        page = api.get("/api/status-servico", params={"search": "_"}).json()
        assert page["totalItems"] == 0

    def test_nao_encontrado(self, api):
        assert api.get("/api/status-servico/inexistente").status_code == 404
        assert api.delete("/api/status-servico/inexistente").status_code == 404


class TestTiposServico:
    """CRUD /api/tipos-servico"""

    def test_cria_e_lista(self, api, novo_tipo):
        novo_tipo(nome="Troca de Tela", descricao="Substituição de display")
        novo_tipo(nome="Backup", descricao="Cópia de segurança dos dados")

        page = api.get("/api/tipos-servico").json()
        assert page["totalItems"] == 2
        assert [t["nome_tipo_servico"] for t in page["data"]] == ["Backup", "Troca de Tela"]

    def test_descricao_obrigatoria(self, api):
        response = api.post("/api/tipos-servico", json={"nome_tipo_servico": "Limpeza"})
        assert response.status_code == 400

    def test_busca(self, api, novo_tipo):
        novo_tipo(nome="Troca de Tela", descricao="Substituição de display")
        novo_tipo(nome="Backup", descricao="Cópia de segurança dos dados")

        page = api.get("/api/tipos-servico", params={"search": "display"}).json()
        assert page["totalItems"] == 1
        assert page["data"][0]["nome_tipo_servico"] == "Troca de Tela"

    def test_atualiza(self, api, novo_tipo):
        tipo = novo_tipo()

        response = api.put(f"/api/tipos-servico/{tipo['id_tipo_servico']}", json={
            "nome_tipo_servico": "Formatação Completa",
            "descricao": "Formatação com backup",
        })
        assert response.status_code == 200
        assert response.json()["nome_tipo_servico"] == "Formatação Completa"

    def test_exclusao_logica(self, api, novo_tipo, novo_servico):
        tipo = novo_tipo()
        servico = novo_servico(tipo=tipo)

        response = api.delete(f"/api/tipos-servico/{tipo['id_tipo_servico']}")
        assert response.status_code == 204

        assert api.get("/api/tipos-servico").json()["totalItems"] == 0

        # OS existente continua apontando para o tipo
        data = api.get(f"/api/servicos/{servico['id_servico']}").json()
        assert data["tipo_servico"]["id_tipo_servico"] == tipo["id_tipo_servico"]
        assert data["tipo_servico"]["ativo"] is False

    def test_nao_encontrado(self, api):
        assert api.get("/api/tipos-servico/inexistente").status_code == 404
        assert api.delete("/api/tipos-servico/inexistente").status_code == 404
