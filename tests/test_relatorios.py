"""
Testes dos relatórios de faturamento e de serviços por status
"""
import pytest

PERIODO = {"data_inicio": "2025-03-01T00:00:00Z", "data_fim": "2025-03-31T23:59:59Z"}


@pytest.fixture
def faturados(api, novo_cliente, novo_tipo, novo_servico, status_por_nome):
    """Uma OS de PF e uma de PJ entregues em março/2025, e uma sem valor"""
    tipo = novo_tipo()
    pf = novo_cliente(nome_completo="Paula Fisica")
    pj = novo_cliente(
        tipo_pessoa="JURIDICA",
        razao_social="Juridica Comercio LTDA",
        cnpj="33.333.333/0001-33",
        nome_completo=None,
        cpf=None,
    )
    entregue = status_por_nome()["Entregue"]

    servicos = []
    for cliente, valor, saida in (
        (pf, 150.0, "2025-03-10T12:00:00Z"),
        (pj, 200.0, "2025-03-20T15:30:00Z"),
        (pf, 0, "2025-03-15T10:00:00Z"),
    ):
        servico = novo_servico(cliente=cliente, tipo=tipo)
        response = api.put(f"/api/servicos/{servico['id_servico']}", json={
            "id_status_atual": entregue,
            "valor_servico": valor,
            "data_efetiva_saida": saida,
        })
        assert response.status_code == 200
        servicos.append(response.json())

    # Fora do período
    fora = novo_servico(cliente=pf, tipo=tipo)
    api.put(f"/api/servicos/{fora['id_servico']}", json={
        "valor_servico": 999.0,
        "data_efetiva_saida": "2025-04-02T09:00:00Z",
    })
    return servicos


class TestRelatorioFaturamento:
    """GET /api/relatorios/faturamento"""

    def test_json(self, api, faturados):
        response = api.get("/api/relatorios/faturamento", params=PERIODO)

        assert response.status_code == 200
        data = response.json()
        assert data["totalFaturado"] == 350.0
        assert data["filtro_tipo_cliente"] == "TODOS"
        assert data["periodo"]["inicio"].startswith("2025-03-01")
        assert data["periodo"]["fim"].startswith("2025-03-31")
        # Ordenado pela data de saída, sem OS de valor zero
        assert [s["valor_servico"] for s in data["data"]] == [150.0, 200.0]
        assert data["data"][0]["cliente"]["email"]

    def test_filtro_pessoa_juridica(self, api, faturados):
        params = {**PERIODO, "tipo_pessoa_cliente": "JURIDICA"}
        data = api.get("/api/relatorios/faturamento", params=params).json()

        assert data["totalFaturado"] == 200.0
        assert len(data["data"]) == 1
        assert data["data"][0]["cliente"]["razao_social"] == "Juridica Comercio LTDA"

    def test_periodo_vazio(self, api, faturados):
        params = {"data_inicio": "2024-01-01T00:00:00Z", "data_fim": "2024-01-31T23:59:59Z"}
        data = api.get("/api/relatorios/faturamento", params=params).json()

        assert data["data"] == []
        assert data["totalFaturado"] == 0

    def test_csv(self, api, faturados):
        params = {**PERIODO, "formato": "csv"}
        response = api.get("/api/relatorios/faturamento", params=params)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "relatorio_faturamento_2025-03-01_a_2025-03-31.csv" in response.headers["content-disposition"]

        linhas = response.text.splitlines()
        assert linhas[0] == "OS;Data Saida;Cliente;Tipo Pessoa;Email Cliente;Tipo Servico;Valor Servico"
        assert "10/03/2025" in linhas[1]
        assert "Paula Fisica" in linhas[1]
        assert linhas[1].endswith(";150.00")
        assert linhas[-1].startswith("Total Faturado")
        assert "350.00" in linhas[-1]

    def test_pdf(self, api, faturados):
        params = {**PERIODO, "formato": "pdf"}
        response = api.get("/api/relatorios/faturamento", params=params)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    def test_datas_obrigatorias(self, api):
        response = api.get("/api/relatorios/faturamento", params={"data_inicio": PERIODO["data_inicio"]})
        assert response.status_code == 400

    def test_data_invalida(self, api):
        params = {"data_inicio": "ontem", "data_fim": PERIODO["data_fim"]}
        response = api.get("/api/relatorios/faturamento", params=params)
        assert response.status_code == 400

    def test_inicio_depois_do_fim(self, api):
        params = {"data_inicio": PERIODO["data_fim"], "data_fim": PERIODO["data_inicio"]}
        response = api.get("/api/relatorios/faturamento", params=params)
        assert response.status_code == 400

    def test_formato_invalido(self, api):
        response = api.get("/api/relatorios/faturamento", params={**PERIODO, "formato": "xls"})
        assert response.status_code == 400


class TestRelatorioServicosStatus:
    """GET /api/relatorios/servicos-status"""

    def test_json_sem_filtros(self, api, novo_servico):
        novo_servico()
        novo_servico()

        response = api.get("/api/relatorios/servicos-status")
        assert response.status_code == 200
        data = response.json()
        assert isinstance(data, list)
        assert len(data) == 2
        assert data[0]["status_atual"]["nome_status"] == "Pendente"

    def test_filtro_por_status(self, api, faturados, status_por_nome):
        entregue = status_por_nome()["Entregue"]

        data = api.get("/api/relatorios/servicos-status", params={"status_id": entregue}).json()
        assert len(data) == 3
        assert all(s["id_status_atual"] == entregue for s in data)

    def test_filtro_por_data_entrada(self, api, novo_servico):
        novo_servico()

        params = {"data_inicio": "2000-01-01T00:00:00Z", "data_fim": "2000-12-31T23:59:59Z"}
        data = api.get("/api/relatorios/servicos-status", params=params).json()
        assert data == []

    def test_csv(self, api, novo_servico):
        servico = novo_servico()

        response = api.get("/api/relatorios/servicos-status", params={"formato": "csv"})
        assert response.status_code == 200
        assert "relatorio_servicos_status_" in response.headers["content-disposition"]

        linhas = response.text.splitlines()
        assert linhas[0] == "OS;Cliente;Tipo Pessoa;Tipo Servico;Data Entrada;Status Atual;Valor Servico"
        assert linhas[1].startswith(servico["id_servico"])
        assert "Pendente" in linhas[1]

    def test_pdf(self, api, faturados, status_por_nome):
        params = {"formato": "pdf", "status_id": status_por_nome()["Entregue"]}
        response = api.get("/api/relatorios/servicos-status", params=params)

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")
