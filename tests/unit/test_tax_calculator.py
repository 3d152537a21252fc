"""Tests for the regime comparison engine."""

from decimal import Decimal

import pytest

from regime_analyzer.core.models import (
    CompanyData,
    ConfigLucroReal,
    ConfigSimplesNacional,
    FaixaSimples,
    Regime,
    Setor,
    TaxConfig,
)
from regime_analyzer.core.services import TaxCalculator, calculate_detailed_taxes
from regime_analyzer.infrastructure.storage import LocalStorage, save_tax_config


def _empresa(receita, custos="0", folha="0", setor=Setor.COMERCIO, uf="SP") -> CompanyData:
    return CompanyData(
        receita=Decimal(receita),
        custos=Decimal(custos),
        folha=Decimal(folha),
        setor=setor,
        uf=uf,
    )


class TestLucroReal:
    """Tests for Lucro Real calculation."""

    def test_commerce_scenario(self, calculator, empresa_comercio):
        """Test every tax line for the reference commerce company."""
        real = calculator.calculate_detailed_taxes(empresa_comercio).lucro_real

        assert real.irpj == Decimal("97500")
        assert real.irpj_adicional == Decimal("41000")
        assert real.csll == Decimal("58500")
        assert real.pis == Decimal("40425")
        assert real.cofins == Decimal("186200")
        assert real.icms == Decimal("441000")
        assert real.inss == Decimal("60000")
        assert real.total == Decimal("924625")

    def test_total_is_sum_of_lines(self, calculator, empresa_comercio):
        """Test that total equals the sum of the individual taxes."""
        real = calculator.calculate_detailed_taxes(empresa_comercio).lucro_real

        soma = (
            real.irpj + real.irpj_adicional + real.csll + real.pis
            + real.cofins + real.icms + real.inss
        )
        assert real.total == soma

    def test_no_surtax_at_exact_threshold(self, calculator):
        """Test that profit of exactly R$ 240.000 has no surtax."""
        real = calculator.calculate_detailed_taxes(
            _empresa("1000000", custos="760000")
        ).lucro_real

        assert real.irpj_adicional == Decimal("0")

    def test_surtax_just_above_threshold(self, calculator):
        """Test that R$ 1 above the threshold pays 10% of R$ 1."""
        real = calculator.calculate_detailed_taxes(
            _empresa("1000000", custos="759999")
        ).lucro_real

        assert real.irpj_adicional == Decimal("0.1")

    def test_negative_profit_is_not_clamped(self, calculator):
        """Test that losses produce negative IRPJ and CSLL."""
        real = calculator.calculate_detailed_taxes(
            _empresa("1000000", custos="2000000")
        ).lucro_real

        assert real.irpj == Decimal("-150000")
        assert real.csll == Decimal("-90000")
        assert real.irpj_adicional == Decimal("0")
        assert real.total == Decimal("32500")

    def test_details_describe_each_tax(self, calculator, empresa_comercio):
        """Test the explanatory lines."""
        detalhes = calculator.calculate_detailed_taxes(empresa_comercio).lucro_real.detalhes

        assert detalhes[0] == "IRPJ: 15% sobre lucro de R$ 650.000,00"
        assert detalhes[1] == "IRPJ Adicional: 10% sobre excesso de R$ 240.000,00"
        assert "PIS: 1,65% sobre receita (não cumulativo)" in detalhes
        assert "ICMS: 18% sobre receita" in detalhes
        assert detalhes[-1] == "INSS Patronal: 20% sobre folha"

    def test_no_surtax_line_without_surtax(self, calculator):
        """Test that the surtax line is omitted when not due."""
        detalhes = calculator.calculate_detailed_taxes(
            _empresa("100000", custos="50000")
        ).lucro_real.detalhes

        assert not any(d.startswith("IRPJ Adicional") for d in detalhes)


class TestLucroPresumido:
    """Tests for Lucro Presumido calculation."""

    def test_commerce_scenario(self, calculator, empresa_comercio):
        """Test every tax line for the reference commerce company."""
        presumido = calculator.calculate_detailed_taxes(empresa_comercio).lucro_presumido

        assert presumido.presuncao == Decimal("8")
        assert presumido.lucro_presumido == Decimal("196000")
        assert presumido.irpj == Decimal("29400")
        assert presumido.csll == Decimal("17640")
        assert presumido.pis == Decimal("15925")
        assert presumido.cofins == Decimal("73500")
        assert presumido.icms == Decimal("441000")
        assert presumido.inss == Decimal("60000")
        assert presumido.total == Decimal("637465")

    def test_services_presumption(self, calculator, empresa_servicos):
        """Test 32% presumption for services."""
        presumido = calculator.calculate_detailed_taxes(empresa_servicos).lucro_presumido

        assert presumido.lucro_presumido == Decimal("320000")
        assert presumido.total == Decimal("313300")

    def test_ignores_actual_profit(self, calculator):
        """Test that costs do not change Lucro Presumido."""
        com_custos = calculator.calculate_detailed_taxes(_empresa("500000", custos="400000"))
        sem_custos = calculator.calculate_detailed_taxes(_empresa("500000"))

        assert com_custos.lucro_presumido.total == sem_custos.lucro_presumido.total

    def test_first_detail_line(self, calculator, empresa_comercio):
        """Test the presumption explanation."""
        detalhes = calculator.calculate_detailed_taxes(empresa_comercio).lucro_presumido.detalhes

        assert detalhes[0] == "Presunção de lucro: 8% para comércio"


class TestSimplesNacional:
    """Tests for Simples Nacional bracket selection."""

    def test_commerce_scenario(self, calculator, empresa_comercio):
        """Test bracket 5 of Anexo 1 for R$ 2.45M."""
        simples = calculator.calculate_detailed_taxes(empresa_comercio).simples_nacional

        assert simples.anexo == "Anexo 1"
        assert simples.faixa == "Faixa 5"
        assert simples.aliquota == Decimal("14.3")
        assert simples.das == Decimal("350350")
        assert simples.inss == Decimal("60000")
        assert simples.total == Decimal("410350")
        assert simples.acima_do_limite is False

    def test_services_use_anexo_3(self, calculator, empresa_servicos):
        """Test that services use Anexo 3."""
        simples = calculator.calculate_detailed_taxes(empresa_servicos).simples_nacional

        assert simples.anexo == "Anexo 3"
        assert simples.faixa == "Faixa 4"
        assert simples.aliquota == Decimal("16")
        assert simples.total == Decimal("180000")

    def test_bracket_ceiling_is_inclusive(self, calculator):
        """Test that revenue equal to a ceiling stays in that bracket."""
        no_limite = calculator.calculate_detailed_taxes(_empresa("180000"))
        acima = calculator.calculate_detailed_taxes(_empresa("180001"))

        assert no_limite.simples_nacional.faixa == "Faixa 1"
        assert acima.simples_nacional.faixa == "Faixa 2"

    def test_revenue_above_ceiling_uses_top_bracket(self, calculator):
        """Test clamping to the last bracket above R$ 4.8M."""
        simples = calculator.calculate_detailed_taxes(_empresa("5000000")).simples_nacional

        assert simples.faixa == "Faixa 6"
        assert simples.aliquota == Decimal("19")
        assert simples.das == Decimal("950000")
        assert simples.acima_do_limite is True
        assert any("acima do teto" in d for d in simples.detalhes)

    @pytest.mark.parametrize("setor", list(Setor))
    def test_rate_never_decreases_with_revenue(self, calculator, setor):
        """Test that a higher revenue never matches a cheaper bracket."""
        receitas = ["0", "180000", "180001", "500000", "720001", "2000000", "3600001", "6000000"]

        aliquotas = [
            calculator.calculate_detailed_taxes(_empresa(r, setor=setor)).simples_nacional.aliquota
            for r in receitas
        ]

        assert aliquotas == sorted(aliquotas)

    def test_brackets_follow_declaration_order(self):
        """Test a custom annex with non-standard bracket names."""
        simples = ConfigSimplesNacional(
            anexo1={
                "primeira": FaixaSimples(limite=Decimal("100"), aliquota=Decimal("1")),
                "segunda": FaixaSimples(limite=Decimal("1000"), aliquota=Decimal("2")),
            }
        )
        calculator = TaxCalculator(TaxConfig(simples_nacional=simples))

        resultado = calculator.calculate_detailed_taxes(_empresa("500")).simples_nacional

        assert resultado.faixa == "segunda"
        assert resultado.das == Decimal("10")


class TestIcms:
    """Tests for state ICMS lookup."""

    def test_state_rate(self, calculator):
        """Test a state with its own rate."""
        results = calculator.calculate_detailed_taxes(_empresa("100000", uf="SC"))

        assert results.lucro_real.icms == Decimal("17000")
        assert results.lucro_presumido.icms == Decimal("17000")

    def test_lowercase_state(self, calculator):
        """Test that lower-case UF is normalized."""
        results = calculator.calculate_detailed_taxes(_empresa("100000", uf="sc"))

        assert results.lucro_real.icms == Decimal("17000")

    def test_unknown_state_falls_back_to_generic_rate(self, calculator):
        """Test fallback to lucroReal.icmsGeral."""
        results = calculator.calculate_detailed_taxes(_empresa("100000", uf="XX"))

        assert results.lucro_real.icms == Decimal("18000")

    def test_fallback_uses_configured_generic_rate(self):
        """Test that a custom generic rate is used for unknown states."""
        config = TaxConfig(lucro_real=ConfigLucroReal(icms_geral=Decimal("12")))

        results = TaxCalculator(config).calculate_detailed_taxes(_empresa("100000", uf="XX"))

        assert results.lucro_real.icms == Decimal("12000")

    def test_zero_state_rate_is_honored(self):
        """Test that a configured 0% rate is not replaced by the fallback."""
        config = TaxConfig(icms_estadual={"SP": Decimal("0")})

        results = TaxCalculator(config).calculate_detailed_taxes(_empresa("100000"))

        assert results.lucro_real.icms == Decimal("0")

    def test_simples_has_no_separate_icms(self, calculator):
        """Test that Simples Nacional total is DAS plus INSS only."""
        simples = calculator.calculate_detailed_taxes(_empresa("100000")).simples_nacional

        assert simples.total == simples.das + simples.inss


class TestComparison:
    """Tests for best option and economy."""

    def test_commerce_best_option(self, calculator, empresa_comercio):
        """Test that Simples Nacional wins for the reference company."""
        results = calculator.calculate_detailed_taxes(empresa_comercio)

        assert results.best_option == Regime.SIMPLES_NACIONAL
        assert results.economy == Decimal("514275")

    def test_loss_favors_lucro_real(self, calculator):
        """Test that a loss makes Lucro Real the cheapest."""
        results = calculator.calculate_detailed_taxes(_empresa("1000000", custos="2000000"))

        assert results.best_option == Regime.LUCRO_REAL
        assert results.lucro_presumido.total == Decimal("235700")
        assert results.simples_nacional.total == Decimal("107000")
        assert results.economy == Decimal("203200")

    def test_all_zero_ties_go_to_lucro_real(self, calculator):
        """Test that a three-way tie selects Lucro Real."""
        results = calculator.calculate_detailed_taxes(_empresa("0"))

        assert results.lucro_real.total == Decimal("0")
        assert results.lucro_presumido.total == Decimal("0")
        assert results.simples_nacional.total == Decimal("0")
        assert results.best_option == Regime.LUCRO_REAL
        assert results.economy == Decimal("0")

    def test_tie_prefers_lucro_presumido_over_simples(self):
        """Test tie order between Lucro Presumido and Simples Nacional."""
        # Every presumido tax is zero and Simples is 0% too
        config = TaxConfig(
            simples_nacional=ConfigSimplesNacional(
                anexo1={"faixa1": FaixaSimples(limite=Decimal("10000000"), aliquota=Decimal("0"))}
            ),
            icms_estadual={"SP": Decimal("0")},
        )
        config = config.model_copy(
            update={
                "lucro_presumido": config.lucro_presumido.model_copy(
                    update={
                        "pis_cumulativo": Decimal("0"),
                        "cofins_cumulativo": Decimal("0"),
                        "presumido_comercio": Decimal("0"),
                    }
                )
            }
        )

        results = TaxCalculator(config).calculate_detailed_taxes(_empresa("100000"))

        assert results.lucro_presumido.total == results.simples_nacional.total
        assert results.best_option == Regime.LUCRO_PRESUMIDO

    def test_best_option_has_minimum_total(self, calculator):
        """Test that the best option is always the cheapest."""
        for receita, custos, setor in [
            ("50000", "10000", Setor.SERVICOS),
            ("3000000", "2900000", Setor.INDUSTRIA),
            ("4000000", "500000", Setor.COMERCIO),
        ]:
            results = calculator.calculate_detailed_taxes(
                _empresa(receita, custos=custos, folha="80000", setor=setor)
            )
            totais = results.total_por_regime()

            assert totais[results.best_option] == min(totais.values())
            assert results.economy == max(totais.values()) - min(totais.values())
            assert results.economy >= 0

    def test_tax_lines_add_up_to_total(self, calculator, empresa_comercio):
        """Test that the listed tax lines sum to each regime's total."""
        results = calculator.calculate_detailed_taxes(empresa_comercio)

        for regime in Regime:
            resultado = results.resultado(regime)
            assert sum(valor for _, valor in resultado.tributos()) == resultado.total

        assert [rotulo for rotulo, _ in results.simples_nacional.tributos()] == [
            "DAS",
            "INSS Patronal",
        ]

    def test_best_breakdown(self, calculator, empresa_comercio):
        """Test that melhor_resultado returns the winning breakdown."""
        results = calculator.calculate_detailed_taxes(empresa_comercio)

        assert results.melhor_resultado is results.simples_nacional

    def test_eligible_best_skips_simples_above_ceiling(self, calculator):
        """Test that an ineligible Simples Nacional stays best but not eligible."""
        results = calculator.calculate_detailed_taxes(_empresa("5000000", custos="4000000"))

        assert results.simples_nacional.acima_do_limite
        assert results.simples_nacional.total == Decimal("950000")
        assert results.best_option == Regime.SIMPLES_NACIONAL
        assert list(results.totais_elegiveis()) == [Regime.LUCRO_REAL, Regime.LUCRO_PRESUMIDO]
        assert results.melhor_opcao_elegivel == Regime.LUCRO_PRESUMIDO
        assert results.economia_elegivel == Decimal("500000")

    def test_eligible_best_matches_best_within_ceiling(self, calculator, empresa_comercio):
        """Test that the eligible best is the best option below the ceiling."""
        results = calculator.calculate_detailed_taxes(empresa_comercio)

        assert results.melhor_opcao_elegivel == results.best_option
        assert results.economia_elegivel == results.economy

    def test_effective_rate(self, calculator, empresa_comercio):
        """Test effective rate as a percentage of revenue."""
        results = calculator.calculate_detailed_taxes(empresa_comercio)

        aliquota = results.aliquota_efetiva(Regime.SIMPLES_NACIONAL, empresa_comercio.receita)

        assert round(aliquota, 2) == Decimal("16.75")

    def test_effective_rate_zero_revenue(self, calculator):
        """Test that zero revenue yields a 0% effective rate."""
        results = calculator.calculate_detailed_taxes(_empresa("0"))

        assert results.aliquota_efetiva(Regime.LUCRO_REAL, Decimal("0")) == Decimal("0")

    def test_results_dump_with_original_keys(self, calculator, empresa_comercio):
        """Test camelCase keys in the serialized result."""
        data = calculator.calculate_detailed_taxes(empresa_comercio).model_dump(by_alias=True)

        assert data["bestOption"] == Regime.SIMPLES_NACIONAL
        assert "irpjAdicional" in data["lucroReal"]
        assert "lucroPresumido" in data["lucroPresumido"]
        assert "acimaDoLimite" in data["simplesNacional"]


class TestCalculatorConfig:
    """Tests for calculator construction."""

    def test_module_function_uses_defaults(self, empresa_comercio):
        """Test the convenience function."""
        results = calculate_detailed_taxes(empresa_comercio)

        assert results.lucro_real.total == Decimal("924625")

    def test_custom_rates(self, empresa_comercio):
        """Test that configured rates are used."""
        config = TaxConfig(lucro_real=ConfigLucroReal(irpj=Decimal("20")))

        results = calculate_detailed_taxes(empresa_comercio, config)

        assert results.lucro_real.irpj == Decimal("130000")
        assert results.lucro_real.detalhes[0].startswith("IRPJ: 20%")

    def test_from_storage_without_saved_config(self, storage):
        """Test that an empty storage yields default rates."""
        calculator = TaxCalculator.from_storage(storage)

        assert calculator.config == TaxConfig()

    def test_from_storage_with_saved_config(self, storage_path, empresa_comercio):
        """Test that saved rates are picked up."""
        config = TaxConfig(lucro_real=ConfigLucroReal(irpj=Decimal("20")))
        save_tax_config(LocalStorage(storage_path), config)

        calculator = TaxCalculator.from_storage(LocalStorage(storage_path))
        results = calculator.calculate_detailed_taxes(empresa_comercio)

        assert results.lucro_real.irpj == Decimal("130000")

    def test_calculation_is_repeatable(self, calculator, empresa_comercio):
        """Test that the same input always gives the same result."""
        primeiro = calculator.calculate_detailed_taxes(empresa_comercio)
        segundo = calculator.calculate_detailed_taxes(empresa_comercio)

        assert primeiro == segundo

    @pytest.mark.parametrize("setor", list(Setor))
    def test_every_sector_is_supported(self, calculator, setor):
        """Test that each sector maps to a presumption and an annex."""
        results = calculator.calculate_detailed_taxes(_empresa("300000", setor=setor))

        assert results.simples_nacional.total > 0
        assert results.lucro_presumido.total > 0
