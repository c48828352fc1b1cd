# src/boutique/reports/labels.py
"""
Report wording per locale. French is the shop's default.
"""

from typing import Any, Dict

from boutique.reports.periods import coerce_period

DEFAULT_LOCALE = 'fr'

LABELS: Dict[str, Dict[str, Any]] = {
    'fr': {
        'periods': {
            'day': "Aujourd'hui",
            'week': 'Cette semaine',
            'month': 'Ce mois',
            'quarter': 'Ce trimestre',
        },
        'payments': {
            'cash': 'Espèces',
            'wave': 'Wave',
            'orange': 'Orange Money',
            'debt': 'Dette',
        },
        'titles': {
            'sales': 'Rapport des ventes',
            'expenses': 'Rapport des charges',
            'balance': 'Bilan financier',
            'invoice': 'Facture',
        },
        'period': 'Période',
        'generated_on': 'Date de génération',
        'date': 'Date',
        'customer': 'Client',
        'items': 'Articles',
        'payment': 'Paiement',
        'amount': 'Montant',
        'description': 'Description',
        'category': 'Catégorie',
        'article': 'Article',
        'quantity': 'Quantité',
        'unit_price': 'Prix unitaire',
        'line_total': 'Total',
        'total': 'TOTAL',
        'income': 'Recettes',
        'charges': 'Charges',
        'income_subtotal': 'Sous-total recettes',
        'charges_subtotal': 'Sous-total charges',
        'net_profit': 'Bénéfice net',
        'invoice_number': 'Facture N°',
        'payment_method': 'Mode de paiement',
        'status': 'Statut',
        'paid': 'Payé',
        'unpaid': 'Non payé',
        'amount_due': 'Total à payer',
        'thanks': 'Merci pour votre achat !',
        'tagline': 'Gestion des ventes',
    },
    'en': {
        'periods': {
            'day': 'Today',
            'week': 'This week',
            'month': 'This month',
            'quarter': 'This quarter',
        },
        'payments': {
            'cash': 'Cash',
            'wave': 'Wave',
            'orange': 'Orange Money',
            'debt': 'Debt',
        },
        'titles': {
            'sales': 'Sales report',
            'expenses': 'Expenses report',
            'balance': 'Balance sheet',
            'invoice': 'Invoice',
        },
        'period': 'Period',
        'generated_on': 'Generated on',
        'date': 'Date',
        'customer': 'Customer',
        'items': 'Items',
        'payment': 'Payment',
        'amount': 'Amount',
        'description': 'Description',
        'category': 'Category',
        'article': 'Item',
        'quantity': 'Quantity',
        'unit_price': 'Unit price',
        'line_total': 'Total',
        'total': 'TOTAL',
        'income': 'Income',
        'charges': 'Expenses',
        'income_subtotal': 'Income subtotal',
        'charges_subtotal': 'Expenses subtotal',
        'net_profit': 'Net profit',
        'invoice_number': 'Invoice No.',
        'payment_method': 'Payment method',
        'status': 'Status',
        'paid': 'Paid',
        'unpaid': 'Unpaid',
        'amount_due': 'Amount due',
        'thanks': 'Thank you for your purchase!',
        'tagline': 'Sales management',
    },
}


def get_labels(locale: str = DEFAULT_LOCALE) -> Dict[str, Any]:
    """Label table for locale, falling back to French."""
    return LABELS.get(locale, LABELS[DEFAULT_LOCALE])


def period_label(period: Any, locale: str = DEFAULT_LOCALE) -> str:
    """Human label of a period, empty for an unrecognized one."""
    period = coerce_period(period)
    if period is None:
        return ''
    return get_labels(locale)['periods'][period.value]


def payment_label(method: str, locale: str = DEFAULT_LOCALE) -> str:
    """Display name of a payment method; unknown methods are shown as-is."""
    return get_labels(locale)['payments'].get(method, method)
