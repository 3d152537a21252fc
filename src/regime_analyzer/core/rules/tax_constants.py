"""Default rates and thresholds for regime comparison.

Values follow the Receita Federal rules used by the comparison dashboard.
All rates are percentages (Decimal("15") means 15%).
Sources:
- Lei 9.249/1995 (IRPJ, adicional de 10% sobre lucro acima de R$ 240.000/ano)
- Lei Complementar 123/2006 (Simples Nacional, Anexos I a III)
"""

from decimal import Decimal

# === IRPJ ===

# Annual profit above this value pays the IRPJ surtax (R$ 20.000/month)
LIMITE_ADICIONAL_IRPJ_ANUAL = Decimal("240000")

# === Lucro Real ===

LUCRO_REAL = {
    "irpj": Decimal("15"),
    "irpjAdicional": Decimal("10"),
    "csll": Decimal("9"),
    "pisNaoCumulativo": Decimal("1.65"),
    "cofinsNaoCumulativo": Decimal("7.6"),
    "icmsGeral": Decimal("18"),
}

# === Lucro Presumido ===

LUCRO_PRESUMIDO = {
    "presumidoComercio": Decimal("8"),
    "presumidoIndustria": Decimal("8"),
    "presumidoServicos": Decimal("32"),
    "irpj": Decimal("15"),
    "csll": Decimal("9"),
    "pisCumulativo": Decimal("0.65"),
    "cofinsCumulativo": Decimal("3"),
    "icmsGeral": Decimal("18"),
}

# === Simples Nacional ===
# Format: faixa -> (limite de receita bruta anual, alíquota)

ANEXO_I = {  # Comércio
    "faixa1": (Decimal("180000"), Decimal("4")),
    "faixa2": (Decimal("360000"), Decimal("7.3")),
    "faixa3": (Decimal("720000"), Decimal("9.5")),
    "faixa4": (Decimal("1800000"), Decimal("10.7")),
    "faixa5": (Decimal("3600000"), Decimal("14.3")),
    "faixa6": (Decimal("4800000"), Decimal("19")),
}

ANEXO_II = {  # Indústria
    "faixa1": (Decimal("180000"), Decimal("4.5")),
    "faixa2": (Decimal("360000"), Decimal("7.8")),
    "faixa3": (Decimal("720000"), Decimal("10")),
    "faixa4": (Decimal("1800000"), Decimal("11.2")),
    "faixa5": (Decimal("3600000"), Decimal("14.7")),
    "faixa6": (Decimal("4800000"), Decimal("30")),
}

ANEXO_III = {  # Serviços
    "faixa1": (Decimal("180000"), Decimal("6")),
    "faixa2": (Decimal("360000"), Decimal("11.2")),
    "faixa3": (Decimal("720000"), Decimal("13.5")),
    "faixa4": (Decimal("1800000"), Decimal("16")),
    "faixa5": (Decimal("3600000"), Decimal("21")),
    "faixa6": (Decimal("4800000"), Decimal("33")),
}

# === ICMS by state (alíquota interna padrão) ===

ICMS_ESTADUAL = {
    "AC": Decimal("17"), "AL": Decimal("17"), "AP": Decimal("18"),
    "AM": Decimal("18"), "BA": Decimal("18"), "CE": Decimal("18"),
    "DF": Decimal("18"), "ES": Decimal("17"), "GO": Decimal("17"),
    "MA": Decimal("18"), "MT": Decimal("17"), "MS": Decimal("17"),
    "MG": Decimal("18"), "PA": Decimal("17"), "PB": Decimal("18"),
    "PR": Decimal("18"), "PE": Decimal("18"), "PI": Decimal("18"),
    "RJ": Decimal("18"), "RN": Decimal("18"), "RS": Decimal("18"),
    "RO": Decimal("17.5"), "RR": Decimal("17"), "SC": Decimal("17"),
    "SP": Decimal("18"), "SE": Decimal("18"), "TO": Decimal("18"),
}

# === Payroll contributions ===

CONTRIBUICAO_PREVIDENCIARIA = {
    "patronal": Decimal("20"),  # only this one enters the comparison
    "terceiros": Decimal("5.8"),
    "rat": Decimal("1"),
    "salarioEducacao": Decimal("2.5"),
    "incra": Decimal("0.2"),
    "sebrae": Decimal("0.6"),
    "senai": Decimal("1"),
    "sesi": Decimal("1.5"),
    "senac": Decimal("1"),
    "sesc": Decimal("1.5"),
}

# === Recommendation thresholds ===

# Minimum annual savings to suggest a regime change
ECONOMIA_MINIMA_SUGESTAO = Decimal("1000")

# Revenue share of the Simples ceiling that triggers a proximity warning
PROXIMIDADE_LIMITE_SIMPLES = Decimal("0.80")

# Payroll / revenue ratio for Fator R (Anexo III vs Anexo V)
FATOR_R_MINIMO = Decimal("0.28")


def percentual(valor: Decimal, aliquota: Decimal) -> Decimal:
    """Apply a percentage rate to a value.

    Args:
        valor: Base value
        aliquota: Rate in percent (e.g., 15 for 15%)

    Returns:
        valor * aliquota / 100
    """
    return valor * aliquota / Decimal("100")
