"""Main Typer application for Regime Analyzer."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from regime_analyzer import __version__
from regime_analyzer.cli.console import (
    console,
    err_console,
    print_error,
    print_success,
    print_warning,
)
from regime_analyzer.core.analyzers import generate_recommendations
from regime_analyzer.core.models import (
    CompanyData,
    DetailedTaxResults,
    Recommendation,
    Regime,
    TaxConfig,
    parse_company_data,
)
from regime_analyzer.core.services import TaxCalculator
from regime_analyzer.infrastructure.parsers import (
    company_template_csv,
    normalize_company_record,
    read_company_record,
)
from regime_analyzer.infrastructure.storage import (
    LocalStorage,
    load_tax_config,
    reset_tax_config,
    save_tax_config,
    update_tax_config,
)
from regime_analyzer.shared.exceptions import InvalidInputError, RegimeAnalyzerError
from regime_analyzer.shared.formatters import format_currency, format_percentage, format_rate

app = typer.Typer(
    name="regime-analyzer",
    help="Comparador de regimes tributários: Lucro Real, Lucro Presumido e Simples Nacional",
    add_completion=True,
    no_args_is_help=True,
)

config_app = typer.Typer(
    help="Consulta e altera a configuração de alíquotas",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

# === Shared parameter types ===

ArquivoEmpresa = Annotated[
    Optional[Path],
    typer.Argument(
        help="Arquivo .json ou .csv com os dados da empresa",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
ReceitaOpt = Annotated[
    Optional[str], typer.Option("--receita", "-r", help="Receita bruta anual")
]
CustosOpt = Annotated[
    Optional[str], typer.Option("--custos", "-c", help="Custos e despesas anuais")
]
FolhaOpt = Annotated[
    Optional[str], typer.Option("--folha", "-f", help="Folha de pagamento anual")
]
SetorOpt = Annotated[
    Optional[str],
    typer.Option("--setor", "-s", help="Setor: comercio, industria ou servicos"),
]
UfOpt = Annotated[Optional[str], typer.Option("--uf", "-u", help="UF da empresa (ex.: SP)")]
StorageOpt = Annotated[
    Optional[Path],
    typer.Option(
        "--storage",
        help="Arquivo de armazenamento da configuração (padrão: ~/.regime-analyzer/storage.json)",
        dir_okay=False,
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Regime Analyzer v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through Rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Mostra a versão e sai",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Exibe logs detalhados do cálculo"),
    ] = False,
) -> None:
    """Regime Analyzer - Comparador de regimes tributários."""
    _configure_logging(verbose)


def _load_company(
    arquivo: Optional[Path],
    receita: Optional[str],
    custos: Optional[str],
    folha: Optional[str],
    setor: Optional[str],
    uf: Optional[str],
) -> CompanyData:
    """Build company data from a file and/or options (options win)."""
    registro = read_company_record(arquivo) if arquivo else {}

    opcoes = {
        "revenue": receita,
        "costs": custos,
        "payroll": folha,
        "sector": setor,
        "state": uf,
    }
    registro.update(
        normalize_company_record({k: v for k, v in opcoes.items() if v is not None})
    )

    if "revenue" not in registro:
        raise InvalidInputError("Informe um arquivo de dados ou a opção --receita")

    return parse_company_data(registro)


def _build_comparison(
    company: CompanyData, config: TaxConfig
) -> tuple[DetailedTaxResults, list[Recommendation]]:
    results = TaxCalculator(config).calculate_detailed_taxes(company)
    recommendations = generate_recommendations(company, results, config=config)
    return results, recommendations


@app.command()
def simulate(
    arquivo: ArquivoEmpresa = None,
    receita: ReceitaOpt = None,
    custos: CustosOpt = None,
    folha: FolhaOpt = None,
    setor: SetorOpt = None,
    uf: UfOpt = None,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Formato de saída: table, json",
        ),
    ] = "table",
    storage: StorageOpt = None,
) -> None:
    """Simula a carga tributária nos três regimes e indica o mais vantajoso."""
    try:
        company = _load_company(arquivo, receita, custos, folha, setor, uf)
        config = load_tax_config(LocalStorage(storage))
        results, recommendations = _build_comparison(company, config)

        if output == "json":
            print(json.dumps(
                results.model_dump(by_alias=True),
                indent=2,
                default=str,
                ensure_ascii=False,
            ))
            return

        if not config.tem_icms_estadual(company.uf):
            print_warning(
                f"UF {company.uf} sem alíquota de ICMS configurada, "
                f"usando {format_rate(config.lucro_real.icms_geral)}"
            )
        _display_results(company, results, recommendations)

    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        print_error(f"Erro inesperado: {e}")
        raise typer.Exit(1)


@app.command()
def report(
    arquivo: ArquivoEmpresa = None,
    receita: ReceitaOpt = None,
    custos: CustosOpt = None,
    folha: FolhaOpt = None,
    setor: SetorOpt = None,
    uf: UfOpt = None,
    tipo: Annotated[
        str,
        typer.Option("--tipo", "-t", help="Tipo de relatório: comparison, executive"),
    ] = "comparison",
    periodo: Annotated[
        Optional[str],
        typer.Option("--periodo", "-p", help="Período de referência (padrão: ano atual)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Caminho para arquivo PDF de saída"),
    ] = None,
    storage: StorageOpt = None,
) -> None:
    """Gera relatório em PDF da comparação de regimes."""
    from regime_analyzer.infrastructure.reports import (
        ReportData,
        ReportType,
        generate_pdf_report,
        report_filename,
    )

    tipos = {t.value: t for t in ReportType}
    if tipo not in tipos:
        print_error(f"Tipo de relatório inválido: {tipo}. Use: {', '.join(tipos)}")
        raise typer.Exit(1)
    report_type = tipos[tipo]
    periodo = periodo or str(datetime.now().year)

    try:
        company = _load_company(arquivo, receita, custos, folha, setor, uf)
        config = load_tax_config(LocalStorage(storage))

        console.print()
        console.print("[muted]Calculando regimes...[/muted]")
        results, recommendations = _build_comparison(company, config)

        if output is None:
            output = Path(report_filename(report_type, periodo))

        console.print("[muted]Gerando relatório PDF...[/muted]")
        data = ReportData(
            company=company,
            results=results,
            recommendations=recommendations,
            periodo=periodo,
        )
        generate_pdf_report(data, output, report_type)

        print_success(f"Relatório gerado: {output}")

    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        print_error(f"Erro inesperado: {e}")
        raise typer.Exit(1)


@app.command()
def template(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Caminho do CSV (padrão: imprime na tela)"),
    ] = None,
) -> None:
    """Gera o modelo de planilha CSV com os dados da empresa."""
    content = company_template_csv()
    if output is None:
        print(content, end="")
        return

    try:
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        print_error(f"Não foi possível gravar {output}: {e}")
        raise typer.Exit(1)
    print_success(f"Modelo gerado: {output}")


# === Configuration commands ===


@config_app.command("show")
def config_show(
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Formato de saída: table, json"),
    ] = "table",
    storage: StorageOpt = None,
) -> None:
    """Exibe as alíquotas em uso."""
    try:
        config = load_tax_config(LocalStorage(storage))
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if output == "json":
        print(json.dumps(
            config.model_dump(mode="json", by_alias=True),
            indent=2,
            ensure_ascii=False,
        ))
        return

    _display_config(config)


@config_app.command("set")
def config_set(
    caminho: Annotated[
        str,
        typer.Argument(help="Chave no formato grupo.campo (ex.: lucroReal.irpj, icmsEstadual.SP)"),
    ],
    valor: Annotated[str, typer.Argument(help="Novo valor (percentual ou limite)")],
    storage: StorageOpt = None,
) -> None:
    """Altera uma alíquota e salva a configuração."""
    try:
        local_storage = LocalStorage(storage)
        config = update_tax_config(load_tax_config(local_storage), caminho, valor)
        save_tax_config(local_storage, config)
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"{caminho} = {valor} salvo em {local_storage.path}")


@config_app.command("reset")
def config_reset(storage: StorageOpt = None) -> None:
    """Restaura a configuração padrão."""
    try:
        reset_tax_config(LocalStorage(storage))
    except RegimeAnalyzerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success("Configuração restaurada para o padrão")


@config_app.command("path")
def config_path(storage: StorageOpt = None) -> None:
    """Mostra onde a configuração é armazenada."""
    console.print(str(LocalStorage(storage).path), soft_wrap=True)


# === Display helpers ===


def _display_results(
    company: CompanyData,
    results: DetailedTaxResults,
    recommendations: list[Recommendation],
) -> None:
    """Display comparison results using Rich tables and panels."""
    console.print()
    console.print(
        Panel.fit(
            f"[header]Receita Bruta:[/header] {format_currency(company.receita)}\n"
            f"[header]Custos e Despesas:[/header] {format_currency(company.custos)}\n"
            f"[header]Folha de Pagamento:[/header] {format_currency(company.folha)}\n"
            f"[header]Setor:[/header] {company.setor.label}   "
            f"[header]UF:[/header] {company.uf}",
            title="Regime Analyzer - Dados da Empresa",
            border_style="blue",
        )
    )

    # Totals
    console.print()
    totals_table = Table(show_header=True, header_style="bold", title="Comparativo de Regimes")
    totals_table.add_column("Regime", style="regime")
    totals_table.add_column("Total Anual", justify="right")
    totals_table.add_column("Carga Efetiva", justify="right")
    totals_table.add_column("Situação")

    elegivel = results.melhor_opcao_elegivel
    for regime, total in results.total_por_regime().items():
        situacao = []
        if regime == results.best_option:
            situacao.append("[best]✅ Melhor opção[/best]")
        elif regime == elegivel:
            situacao.append("[best]✅ Melhor elegível[/best]")
        if regime == Regime.SIMPLES_NACIONAL and results.simples_nacional.acima_do_limite:
            situacao.append("[warning]⚠️ Acima do teto[/warning]")

        totals_table.add_row(
            regime.label,
            format_currency(total),
            format_percentage(results.aliquota_efetiva(regime, company.receita)),
            "\n".join(situacao),
        )

    console.print(totals_table)

    # Breakdown per regime
    for regime in Regime:
        _display_breakdown(regime, results)

    resumo = (
        f"[header]Melhor opção:[/header] [best]{results.best_option.label}[/best]\n"
        f"[header]Economia anual:[/header] [currency]{format_currency(results.economy)}[/currency]"
    )
    if elegivel != results.best_option:
        resumo += (
            f"\n[warning]{results.best_option.label} não é elegível "
            f"(receita acima do teto)[/warning]\n"
            f"[header]Melhor opção elegível:[/header] [best]{elegivel.label}[/best]\n"
            f"[header]Economia elegível:[/header] "
            f"[currency]{format_currency(results.economia_elegivel)}[/currency]"
        )

    console.print()
    console.print(
        Panel.fit(
            resumo,
            title="Resultado",
            border_style="green",
        )
    )

    if recommendations:
        console.print()
        console.print("[header]💡 Recomendações:[/header]")
        for rec in recommendations:
            economia = ""
            if rec.economia_potencial:
                economia = f" [currency]({format_currency(rec.economia_potencial)})[/currency]"
            console.print(f"  [highlight]•[/highlight] [bold]{rec.titulo}[/bold]{economia}")
            console.print(f"    [muted]{rec.descricao}[/muted]")


def _display_breakdown(regime: Regime, results: DetailedTaxResults) -> None:
    """Display one regime's tax lines and notes."""
    resultado = results.resultado(regime)

    console.print()
    table = Table(show_header=True, header_style="bold", title=regime.label)
    table.add_column("Tributo", style="regime")
    table.add_column("Valor", justify="right")

    for rotulo, valor in resultado.tributos():
        style = "currency_negative" if valor < 0 else "currency"
        table.add_row(rotulo, f"[{style}]{format_currency(valor)}[/{style}]")
    table.add_row("[bold]Total[/bold]", f"[bold]{format_currency(resultado.total)}[/bold]")

    console.print(table)
    for detalhe in resultado.detalhes:
        console.print(f"  [muted]• {detalhe}[/muted]")


def _display_config(config: TaxConfig) -> None:
    """Display the rate table."""
    rates_table = Table(show_header=True, header_style="bold", title="Alíquotas Federais")
    rates_table.add_column("Tributo", style="regime")
    rates_table.add_column("Lucro Real", justify="right")
    rates_table.add_column("Lucro Presumido", justify="right")

    real = config.lucro_real
    presumido = config.lucro_presumido
    rates_table.add_row("IRPJ", format_rate(real.irpj), format_rate(presumido.irpj))
    rates_table.add_row("IRPJ Adicional", format_rate(real.irpj_adicional), "-")
    rates_table.add_row("CSLL", format_rate(real.csll), format_rate(presumido.csll))
    rates_table.add_row(
        "PIS", format_rate(real.pis_nao_cumulativo), format_rate(presumido.pis_cumulativo)
    )
    rates_table.add_row(
        "COFINS", format_rate(real.cofins_nao_cumulativo), format_rate(presumido.cofins_cumulativo)
    )
    rates_table.add_row("ICMS geral", format_rate(real.icms_geral), format_rate(presumido.icms_geral))
    rates_table.add_row(
        "INSS Patronal",
        format_rate(config.contribuicao_previdenciaria.patronal),
        format_rate(config.contribuicao_previdenciaria.patronal),
    )
    console.print()
    console.print(rates_table)

    presuncao_table = Table(show_header=True, header_style="bold", title="Presunção de Lucro")
    presuncao_table.add_column("Setor", style="regime")
    presuncao_table.add_column("Percentual", justify="right")
    presuncao_table.add_row("Comércio", format_rate(presumido.presumido_comercio))
    presuncao_table.add_row("Indústria", format_rate(presumido.presumido_industria))
    presuncao_table.add_row("Serviços", format_rate(presumido.presumido_servicos))
    console.print()
    console.print(presuncao_table)

    simples = config.simples_nacional
    for nome, faixas in (
        ("Anexo 1 (Comércio)", simples.anexo1),
        ("Anexo 2 (Indústria)", simples.anexo2),
        ("Anexo 3 (Serviços)", simples.anexo3),
    ):
        anexo_table = Table(show_header=True, header_style="bold", title=f"Simples Nacional - {nome}")
        anexo_table.add_column("Faixa", style="regime")
        anexo_table.add_column("Receita até", justify="right")
        anexo_table.add_column("Alíquota", justify="right")
        for faixa_nome, faixa in faixas.items():
            anexo_table.add_row(faixa_nome, format_currency(faixa.limite), format_rate(faixa.aliquota))
        console.print()
        console.print(anexo_table)

    icms_table = Table(show_header=True, header_style="bold", title="ICMS por UF")
    icms_table.add_column("UF", style="regime")
    icms_table.add_column("Alíquota", justify="right")
    for uf, aliquota in sorted(config.icms_estadual.items()):
        icms_table.add_row(uf, format_rate(aliquota))
    console.print()
    console.print(icms_table)


if __name__ == "__main__":
    app()
