"""
Test suite for accounts module

Tests deposits, withdrawals, overdraft policies, reversal of the latest
transaction and the balance == history invariant.
"""

import pytest
from decimal import Decimal

from minibank.accounts import Account, AccountSummary, OverdraftPolicy, PolicyKind
from minibank.errors import ErrorKind
from minibank.transactions import TransactionKind


@pytest.fixture
def account():
    """Account with no overdraft and a 100.00 balance"""
    acc = Account(id=1, owner="Alice")
    acc.deposit(Decimal('100'), "initial")
    return acc


class TestOverdraftPolicy:
    """Test OverdraftPolicy values"""
    
    def test_no_overdraft_default(self):
        policy = OverdraftPolicy.no_overdraft()
        assert policy.kind == PolicyKind.NO_OVERDRAFT
        assert policy.floor == Decimal('0')
        assert policy.permits(Decimal('0'))
        assert not policy.permits(Decimal('-0.01'))
    
    def test_credit_limit(self):
        policy = OverdraftPolicy.with_credit_limit("50")
        assert policy.kind == PolicyKind.CREDIT_LIMIT
        assert policy.floor == Decimal('-50.00')
        assert policy.permits(Decimal('-50'))
        assert not policy.permits(Decimal('-50.01'))
    
    def test_invalid_policies(self):
        """Test that inconsistent policies are refused"""
        with pytest.raises(ValueError, match="cannot be negative"):
            OverdraftPolicy(PolicyKind.CREDIT_LIMIT, Decimal('-1'))
        with pytest.raises(ValueError, match="cannot carry a credit limit"):
            OverdraftPolicy(PolicyKind.NO_OVERDRAFT, Decimal('10'))


class TestDeposit:
    """Test Account.deposit"""
    
    def test_deposit_increases_balance(self, account):
        result = account.deposit(Decimal('50'), "manual")
        
        assert result.ok
        assert account.balance == Decimal('150.00')
        assert result.value.kind == TransactionKind.DEPOSIT
        assert result.value.note == "manual"
        assert account.history[-1] is result.value
    
    def test_invalid_amounts_change_nothing(self, account):
        """Test zero, negative and non-numeric deposits"""
        for bad in [0, Decimal('-5'), "abc", "0.001"]:
            result = account.deposit(bad)
            assert not result.ok
            assert result.kind == ErrorKind.INVALID_AMOUNT
        
        assert account.balance == Decimal('100.00')
        assert len(account.history) == 1
    
    def test_transfer_in_kind(self, account):
        result = account.deposit(Decimal('5'), "from 2", TransactionKind.TRANSFER_IN)
        assert result.value.kind == TransactionKind.TRANSFER_IN
    
    def test_debit_kind_rejected(self, account):
        """Test that a debit kind cannot be deposited"""
        with pytest.raises(ValueError):
            account.deposit(Decimal('5'), kind=TransactionKind.WITHDRAW)
    
    def test_deposit_that_would_overflow(self, account):
        """Test that a balance beyond the decimal context is refused"""
        big = Decimal('6' * 26)
        account.deposit(big).unwrap()
        
        result = account.deposit(big)
        assert result.kind == ErrorKind.INVALID_AMOUNT
        assert account.balance == big + Decimal('100')
        assert len(account.history) == 2


class TestWithdraw:
    """Test Account.withdraw"""
    
    def test_withdraw_decreases_balance(self, account):
        result = account.withdraw(Decimal('40'), "manual")
        
        assert result.ok
        assert account.balance == Decimal('60.00')
        assert result.value.kind == TransactionKind.WITHDRAW
    
    def test_withdraw_entire_balance(self, account):
        assert account.withdraw(Decimal('100')).ok
        assert account.balance == Decimal('0.00')
    
    def test_insufficient_funds_changes_nothing(self, account):
        """Test the no-overdraft rule"""
        result = account.withdraw(Decimal('200'))
        
        assert not result.ok
        assert result.kind == ErrorKind.INSUFFICIENT_FUNDS
        assert "Insufficient funds" in result.error.reason
        assert account.balance == Decimal('100.00')
        assert len(account.history) == 1
    
    def test_invalid_amount(self, account):
        assert account.withdraw(Decimal('-1')).kind == ErrorKind.INVALID_AMOUNT
        assert account.withdraw(0).kind == ErrorKind.INVALID_AMOUNT
    
    def test_credit_limit_allows_negative_balance(self):
        acc = Account(id=2, owner="Bob", policy=OverdraftPolicy.with_credit_limit(50))
        
        assert acc.withdraw(Decimal('30')).ok
        assert acc.balance == Decimal('-30.00')
        assert acc.withdraw(Decimal('20')).ok
        assert acc.withdraw(Decimal('0.01')).kind == ErrorKind.INSUFFICIENT_FUNDS
        assert acc.balance == Decimal('-50.00')
    
    def test_credit_kind_rejected(self, account):
        with pytest.raises(ValueError):
            account.withdraw(Decimal('5'), kind=TransactionKind.TRANSFER_IN)


class TestRevert:
    """Test Account.revert of the latest history entry"""
    
    def test_revert_deposit(self, account):
        t = account.deposit(Decimal('25')).value
        
        result = account.revert(t)
        
        assert result.ok
        assert account.balance == Decimal('100.00')
        assert t not in account.history
    
    def test_revert_withdraw(self, account):
        t = account.withdraw(Decimal('25')).value
        
        assert account.revert(t).ok
        assert account.balance == Decimal('100.00')
        assert len(account.history) == 1
    
    def test_revert_credit_needs_funds(self):
        """Test taking back a credit that is no longer covered"""
        acc = Account(id=3, owner="Carol")
        t = acc.deposit(Decimal('10')).value
        acc.balance = Decimal('5')  # simulate funds already gone
        
        assert not acc.can_revert(t)
        result = acc.revert(t)
        assert result.kind == ErrorKind.INSUFFICIENT_FUNDS
        assert acc.history == [t]
    
    def test_revert_earlier_entry(self, account):
        """Test that an entry below the top of history can be taken back"""
        first = account.history[0]
        later = account.deposit(Decimal('1'), "later").value
        
        result = account.revert(first)
        assert result.ok
        assert account.history == [later]
        assert account.balance == Decimal('1.00')
        assert not account.holds(first)
    
    def test_revert_unknown_entry(self, account):
        """Test that an entry outside history is refused and nothing changes"""
        first = account.history[0]
        account.revert(first).unwrap()
        
        result = account.revert(first)
        assert result.kind == ErrorKind.NOT_FOUND
        assert account.history == []
        assert account.balance == Decimal('0')


class TestInvariantAndRender:
    """Test balance derivation and rendering"""
    
    def test_balance_equals_history(self, account):
        account.deposit(Decimal('10.25'))
        account.withdraw(Decimal('3.10'))
        account.deposit(Decimal('1'), kind=TransactionKind.TRANSFER_IN)
        account.withdraw(Decimal('8'), kind=TransactionKind.TRANSFER_OUT)
        account.withdraw(Decimal('500'))  # rejected
        
        assert account.balance == account.net_history_balance()
        assert account.balance == Decimal('100.15')
    
    def test_summary(self, account):
        assert account.summary() == AccountSummary(1, "Alice", Decimal('100.00'))
    
    def test_render(self, account):
        account.withdraw(Decimal('20'), "manual")
        account.withdraw(Decimal('5'), "to 2", TransactionKind.TRANSFER_OUT)
        
        lines = account.render().splitlines()
        
        assert lines[0] == "Account 1 (Alice) balance=75.00"
        assert len(lines) == 4
        assert lines[1].endswith("] Dep + 100.00 | initial")
        assert lines[2].endswith("] Wdr - 20.00 | manual")
        assert lines[3].endswith("] TOut - 5.00 | to 2")
        assert lines[1].startswith("  [")
    
    def test_render_precision(self, account):
        assert account.render(precision=0).splitlines()[0] == "Account 1 (Alice) balance=100"
