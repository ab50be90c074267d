"""
Testes unitários de paginação, formatação e validação
"""
from datetime import datetime, timezone, timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.api.pagination import PageParams, total_pages
from app.schemas import ClienteCreate
from app.schemas.common import to_naive_utc, blank_to_none
from app.utils.report_generator import formatar_data, formatar_valor, formatar_moeda


class TestPaginacao:

    @pytest.mark.parametrize("total, limit, esperado", [
        (0, 10, 0),
        (1, 10, 1),
        (10, 10, 1),
        (11, 10, 2),
        (25, 2, 13),
    ])
    def test_total_pages_arredonda_para_cima(self, total, limit, esperado):
        assert total_pages(total, limit) == esperado

    def test_offset(self):
        assert PageParams(page=1, limit=10).offset == 0
        assert PageParams(page=3, limit=10).offset == 20


class TestFormatacao:

    def test_formatar_data(self):
        assert formatar_data(datetime(2025, 3, 7, 14, 30)) == "07/03/2025"
        assert formatar_data(None) == ""

    def test_formatar_valor(self):
        assert formatar_valor(Decimal("150")) == "150.00"
        assert formatar_valor(99.9) == "99.90"
        assert formatar_valor(None) == "0.00"

    def test_formatar_moeda(self):
        assert formatar_moeda(Decimal("1234.5")) == "R$ 1.234,50"
        assert formatar_moeda(0) == "R$ 0,00"


class TestNormalizacao:

    def test_to_naive_utc(self):
        brasilia = timezone(timedelta(hours=-3))
        valor = datetime(2025, 3, 10, 9, 0, tzinfo=brasilia)
        assert to_naive_utc(valor) == datetime(2025, 3, 10, 12, 0)
        assert to_naive_utc(datetime(2025, 3, 10, 9, 0)) == datetime(2025, 3, 10, 9, 0)
        assert to_naive_utc(None) is None

    def test_blank_to_none(self):
        assert blank_to_none("   ") is None
        assert blank_to_none("") is None
        assert blank_to_none("abc") == "abc"


class TestClienteCreate:

    def test_cpf_vazio_conta_como_ausente(self):
        with pytest.raises(ValidationError):
            ClienteCreate(
                tipo_pessoa="FISICA",
                nome_completo="Fulano",
                cpf="  ",
                telefone_principal="(11) 90000-0000",
                email="fulano@email.com",
            )

    def test_pessoa_juridica_valida(self):
        cliente = ClienteCreate(
            tipo_pessoa="JURIDICA",
            razao_social="Empresa LTDA",
            cnpj="44.444.444/0001-44",
            telefone_principal="(11) 3000-0000",
            email="empresa@email.com",
        )
        assert cliente.tipo_pessoa.value == "JURIDICA"
