"""
Test suite for transaction records

Tests kind metadata, immutability and amount validation.
"""

import dataclasses
import pytest
from decimal import Decimal
from datetime import timezone

from minibank.transactions import Transaction, TransactionKind


class TestTransactionKind:
    """Test TransactionKind metadata"""
    
    def test_signs(self):
        """Test credit and debit kinds"""
        assert TransactionKind.DEPOSIT.is_credit
        assert TransactionKind.TRANSFER_IN.is_credit
        assert TransactionKind.WITHDRAW.is_debit
        assert TransactionKind.TRANSFER_OUT.is_debit
        assert not TransactionKind.DEPOSIT.is_debit
    
    def test_labels(self):
        """Test render labels"""
        assert TransactionKind.DEPOSIT.label == "Dep +"
        assert TransactionKind.WITHDRAW.label == "Wdr -"
        assert TransactionKind.TRANSFER_IN.label == "TIn +"
        assert TransactionKind.TRANSFER_OUT.label == "TOut -"
    
    def test_from_code(self):
        assert TransactionKind.from_code("transfer_out") is TransactionKind.TRANSFER_OUT
        with pytest.raises(ValueError, match="Unknown transaction kind"):
            TransactionKind.from_code("interest")


class TestTransaction:
    """Test Transaction record"""
    
    def test_creation_defaults(self):
        """Test note default and engine-assigned timestamp"""
        t = Transaction(1, TransactionKind.DEPOSIT, Decimal('10.00'))
        assert t.note == ""
        assert t.created_at.tzinfo == timezone.utc
        assert t.created_at.microsecond == 0
    
    def test_amount_must_be_positive(self):
        """Test the positive-amount invariant"""
        with pytest.raises(ValueError, match="must be positive"):
            Transaction(1, TransactionKind.DEPOSIT, Decimal('0'))
        with pytest.raises(ValueError, match="must be positive"):
            Transaction(1, TransactionKind.WITHDRAW, Decimal('-5'))
    
    def test_amount_coerced_to_decimal(self):
        t = Transaction(1, TransactionKind.DEPOSIT, 5)
        assert isinstance(t.amount, Decimal)
        assert t.amount == Decimal('5')
    
    def test_immutable(self):
        """Test that records cannot be changed after creation"""
        t = Transaction(1, TransactionKind.DEPOSIT, Decimal('10'))
        with pytest.raises(dataclasses.FrozenInstanceError):
            t.amount = Decimal('20')
    
    def test_signed_amount(self):
        assert Transaction(1, TransactionKind.DEPOSIT, Decimal('10')).signed_amount == Decimal('10')
        assert Transaction(1, TransactionKind.TRANSFER_OUT, Decimal('10')).signed_amount == Decimal('-10')
    
    def test_to_dict(self):
        t = Transaction(3, TransactionKind.TRANSFER_IN, Decimal('30.00'), "from 1")
        data = t.to_dict()
        assert data["account_id"] == 3
        assert data["kind"] == "transfer_in"
        assert data["amount"] == "30.00"
        assert data["note"] == "from 1"
        assert data["created_at"] == t.created_at.isoformat()
