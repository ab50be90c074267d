"""
Gestão de OS - CLI Admin
Ferramenta de linha de comando para consultar o sistema

Uso:
    python admin_cli.py login
    python admin_cli.py painel
    python admin_cli.py clientes list [busca]
    python admin_cli.py status list
    python admin_cli.py status create "Nome" [ordem]
    python admin_cli.py servicos list [status_id]
    python admin_cli.py relatorio faturamento <data_inicio> <data_fim> [csv|pdf]
"""
import os
import sys
import httpx
from pathlib import Path

BASE_URL = os.getenv("OS_API_URL", "http://localhost:8080")
TOKEN_FILE = Path(".os_token")


def save_token(token: str):
    TOKEN_FILE.write_text(token)


def load_token() -> str:
    if TOKEN_FILE.exists():
        return TOKEN_FILE.read_text().strip()
    return None


def get_headers():
    token = load_token()
    if not token:
        print("Erro: Faça login primeiro com 'python admin_cli.py login'")
        sys.exit(1)
    return {"Authorization": f"Bearer {token}"}


def _erro(response: httpx.Response) -> str:
    try:
        return str(response.json().get("detail", response.text))
    except ValueError:
        return response.text


def cmd_login():
    """Login no sistema"""
    email = input("Email: ").strip()
    password = input("Senha: ").strip()

    try:
        response = httpx.post(
            f"{BASE_URL}/api/auth/login",
            json={"email": email, "password": password}
        )
    except httpx.HTTPError as e:
        print(f"✗ Erro de conexão: {e}")
        return

    if response.status_code == 200:
        data = response.json()
        save_token(data["access_token"])
        print(f"\n✓ Login bem sucedido!")
        print(f"  Usuário: {data['user']['email']}")
    else:
        print(f"✗ Erro: {_erro(response)}")


def cmd_painel():
    """Mostra indicadores do painel"""
    try:
        response = httpx.get(f"{BASE_URL}/api/painel/resumo", headers=get_headers())
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")
        return

    if response.status_code != 200:
        print(f"✗ Erro: {_erro(response)}")
        return

    resumo = response.json()
    print(f"\n{'='*40}")
    print(f"  PAINEL")
    print(f"{'='*40}")
    print(f"  Clientes ativos: {resumo['clientes']['ativos']}")
    print(f"  Ordens de serviço: {resumo['servicos']['total']}")
    for nome, total in resumo['servicos']['por_status'].items():
        print(f"    - {nome}: {total}")
    print(f"  Entradas (30 dias): {resumo['servicos']['entradas_30_dias']}")
    print(f"  Faturamento do mês: R$ {resumo['faturamento_mes']:.2f}")
    print(f"{'='*40}")


def cmd_clientes_list(search: str = ""):
    """Lista clientes"""
    try:
        response = httpx.get(
            f"{BASE_URL}/api/clientes",
            params={"search": search, "limit": 100},
            headers=get_headers()
        )
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")
        return

    if response.status_code != 200:
        print(f"✗ Erro: {_erro(response)}")
        return

    page = response.json()
    print(f"\n{'='*80}")
    print(f"{'ID':<36} | {'Nome':<20} | {'Tipo':<8} | {'Email':<20}")
    print(f"{'='*80}")
    for c in page["data"]:
        nome = (c.get("nome_exibicao") or "")[:20]
        print(f"{c['id_cliente']:<36} | {nome:<20} | {c['tipo_pessoa']:<8} | {c['email'][:20]:<20}")
    print(f"\nTotal: {page['totalItems']} clientes")


def cmd_status_list():
    """Lista status de serviço"""
    try:
        response = httpx.get(f"{BASE_URL}/api/status-servico", params={"limit": 100}, headers=get_headers())
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")
        return

    if response.status_code != 200:
        print(f"✗ Erro: {_erro(response)}")
        return

    for s in response.json()["data"]:
        ordem = s["ordem"] if s["ordem"] is not None else "-"
        print(f"{s['id_status_servico']:<36} | {ordem:>3} | {s['nome_status']}")


def cmd_status_create(nome: str, ordem: str = None):
    """Cria novo status de serviço"""
    body = {"nome_status": nome}
    if ordem is not None:
        body["ordem"] = int(ordem)

    try:
        response = httpx.post(f"{BASE_URL}/api/status-servico", json=body, headers=get_headers())
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")
        return

    if response.status_code == 201:
        print(f"✓ Status criado: {response.json()['id_status_servico']}")
    else:
        print(f"✗ Erro: {_erro(response)}")


def cmd_servicos_list(status_id: str = ""):
    """Lista ordens de serviço"""
    try:
        response = httpx.get(
            f"{BASE_URL}/api/servicos",
            params={"status_filter": status_id, "limit": 100},
            headers=get_headers()
        )
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")
        return

    if response.status_code != 200:
        print(f"✗ Erro: {_erro(response)}")
        return

    page = response.json()
    print(f"\n{'='*90}")
    print(f"{'OS':<8} | {'Entrada':<10} | {'Cliente':<24} | {'Status':<18} | {'Problema':<20}")
    print(f"{'='*90}")
    for s in page["data"]:
        cliente = s.get("cliente") or {}
        nome = (cliente.get("nome_completo") or cliente.get("razao_social") or "N/A")[:24]
        status_nome = ((s.get("status_atual") or {}).get("nome_status") or "N/A")[:18]
        entrada = (s.get("data_entrada") or "")[:10]
        print(f"{s['id_servico'][:8]:<8} | {entrada:<10} | {nome:<24} | {status_nome:<18} | {s['descricao_problema'][:20]:<20}")
    print(f"\nTotal: {page['totalItems']} OS")


def cmd_relatorio_faturamento(data_inicio: str, data_fim: str, formato: str = "csv"):
    """Baixa o relatório de faturamento"""
    try:
        response = httpx.get(
            f"{BASE_URL}/api/relatorios/faturamento",
            params={"data_inicio": data_inicio, "data_fim": data_fim, "formato": formato},
            headers=get_headers(),
            timeout=60
        )
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")
        return

    if response.status_code != 200:
        print(f"✗ Erro: {_erro(response)}")
        return

    disposition = response.headers.get("content-disposition", "")
    filename = disposition.split("filename=")[-1].strip('"') or f"relatorio_faturamento.{formato}"
    Path(filename).write_bytes(response.content)
    print(f"✓ Relatório salvo em {filename}")


def print_help():
    print("""
Gestão de OS - CLI Admin
========================

Comandos disponíveis:

  python admin_cli.py login                                  - Fazer login
  python admin_cli.py painel                                 - Ver indicadores

  python admin_cli.py clientes list [busca]                  - Listar clientes
  python admin_cli.py status list                            - Listar status
  python admin_cli.py status create "Nome" [ordem]           - Criar status
  python admin_cli.py servicos list [status_id]              - Listar OS

  python admin_cli.py relatorio faturamento <inicio> <fim> [csv|pdf]
                                                             - Baixar faturamento
                                                               Datas em ISO-8601

Exemplos:
  python admin_cli.py clientes list silva
  python admin_cli.py relatorio faturamento 2025-01-01T00:00:00Z 2025-01-31T23:59:59Z pdf

A URL da API pode ser trocada com a variável OS_API_URL.
""")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print_help()
        sys.exit(0)

    cmd = sys.argv[1].lower()
    args = sys.argv[2:]

    if cmd == "login":
        cmd_login()
    elif cmd == "painel":
        cmd_painel()
    elif cmd == "clientes" and args[:1] == ["list"]:
        cmd_clientes_list(args[1] if len(args) > 1 else "")
    elif cmd == "status" and args[:1] == ["list"]:
        cmd_status_list()
    elif cmd == "status" and args[:1] == ["create"] and len(args) >= 2:
        cmd_status_create(args[1], args[2] if len(args) > 2 else None)
    elif cmd == "servicos" and args[:1] == ["list"]:
        cmd_servicos_list(args[1] if len(args) > 1 else "")
    elif cmd == "relatorio" and args[:1] == ["faturamento"] and len(args) >= 3:
        cmd_relatorio_faturamento(args[1], args[2], args[3] if len(args) > 3 else "csv")
    elif cmd == "help":
        print_help()
    else:
        print(f"Comando desconhecido: {' '.join(sys.argv[1:])}")
        print_help()
