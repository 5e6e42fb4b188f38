"""
Tests for the document and email seams built on the financial summary
"""
import pytest
from datetime import date, timedelta
from decimal import Decimal

from invoicer.config import Config, TestingConfig
from invoicer.services.calculation_service import compute_summary
from invoicer.services.invoice_document import (
    OutputFormat,
    build_invoice_document,
    build_line_items,
    build_summary_lines,
    compose_email_summary,
)


@pytest.fixture
def record():
    return {
        'invoiceNumber': 'INV-2024-05-321',
        'docType': 'Invoice',
        'project': 'WEB-01',
        'longDesc': 'Website redesign',
        'qty': 10,
        'rate': 50,
        'discount': 10,
        'vat': 15,
        'paid': 0,
        'fx': 1,
        'showVat': True,
        'totalInclVat': True,
        'startDate': '2024-05-01',
        'etaDays': 30,
        'clientData': {'name': 'Acme Ltd'},
        'companyData': {'name': 'Studio Co'},
        'resources': [{'type': 'Designer', 'hours': 4, 'rate': 25}],
    }


def _labels(lines):
    return [line.label for line in lines]


class TestSummaryLines:

    def test_full_footer(self, record):
        lines = build_summary_lines(record)
        assert _labels(lines) == ['Subtotal', 'Discount (10%)', 'VAT (15%)', 'Total']
        subtotal, discount, vat, total = lines
        assert subtotal.amount == 600
        assert discount.amount == -60
        assert discount.formatted == '-60'
        assert vat.amount == 81
        assert total.amount == 621
        assert total.emphasis

    def test_optional_rows_hidden(self, record):
        record.update({'discount': 0, 'showVat': False})
        assert _labels(build_summary_lines(record)) == ['Subtotal', 'Total']

    def test_zero_vat_hidden(self, record):
        record['vat'] = 0
        assert 'VAT (0%)' not in _labels(build_summary_lines(record))

    def test_payment_rows(self, record):
        record['paid'] = 121
        lines = build_summary_lines(record, currency='USD')
        assert _labels(lines)[-2:] == ['Amount Paid', 'Amount Due']
        assert lines[-2].formatted == 'USD 121'
        assert lines[-1].formatted == 'USD 500'

    def test_total_excluding_vat(self, record):
        record['totalInclVat'] = False
        total = [line for line in build_summary_lines(record) if line.label == 'Total'][0]
        assert total.amount == 540

    def test_fractional_percent_label(self, record):
        record['vat'] = 12.5
        assert 'VAT (12.5%)' in _labels(build_summary_lines(record))

    def test_uses_given_summary(self, record):
        summary = compute_summary(record)
        assert build_summary_lines(record, summary) == build_summary_lines(record)


class TestLineItems:

    def test_main_and_resource_lines(self, record):
        main, resource = build_line_items(record)
        assert main.code == 'WEB-01'
        assert main.description == 'Website redesign'
        assert main.quantity == '10'
        assert main.amount == 500
        assert resource.code == 'RES-DESIGN'
        assert resource.quantity == '4 hrs'
        assert resource.amount == 100

    def test_placeholders(self):
        (main,) = build_line_items({'qty': 1, 'rate': 5})
        assert main.code == 'PROJ-001'
        assert main.description == 'Project work'


class TestInvoiceDocument:

    def test_build_document(self, record):
        document = build_invoice_document(record, currency='USD')
        assert document.number == 'INV-2024-05-321'
        assert document.issue_date == date(2024, 5, 1)
        assert document.due_date == date(2024, 5, 31)
        assert document.client_name == 'Acme Ltd'
        assert document.company_name == 'Studio Co'
        assert len(document.items) == 2
        assert document.total_line.formatted == 'USD 621'
        assert document.summary.amount_due == Decimal('621')
        assert document.filename == 'invoice-INV-2024-05-321.pdf'
        assert document.output_format.media_type == 'application/pdf'

    def test_due_date_defaults_to_configured_eta(self, record):
        del record['etaDays']
        expected = date(2024, 5, 1) + timedelta(days=Config.DEFAULT_ETA_DAYS)
        assert build_invoice_document(record).due_date == expected

        class ShortEtaConfig(TestingConfig):
            DEFAULT_ETA_DAYS = 14

        document = build_invoice_document(record, config=ShortEtaConfig)
        assert document.due_date == date(2024, 5, 15)

    def test_html_document(self, record):
        document = build_invoice_document(record, output_format=OutputFormat.HTML)
        assert document.filename.endswith('.html')
        assert document.output_format.media_type == 'text/html'

    def test_document_and_email_agree(self, record):
        record['paid'] = 21
        document = build_invoice_document(record)
        email = compose_email_summary(record)
        for line in document.summary_lines:
            assert f"{line.label}: {line.formatted}" in email


class TestEmailSummary:

    def test_email_block(self, record):
        text = compose_email_summary(record, currency='GHS')
        assert text.splitlines() == [
            'Financial Summary',
            'Quantity: 10',
            'Rate: GHS 50',
            'Subtotal: GHS 600',
            'Discount (10%): -GHS 60',
            'VAT (15%): GHS 81',
            'Total: GHS 621',
        ]
