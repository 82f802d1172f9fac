# backend/tests/repositories/test_payment_method_repository.py
import pytest
from sqlalchemy.exc import IntegrityError

from carwash.models.payment_method import PaymentMethod
from carwash.repositories.factory import RepositoryFactory


def test_single_principal_enforced_by_database(db, test_user):
    db.add(PaymentMethod(user_id=test_user.id, type="cash", is_principal=True))
    db.commit()

    db.add(PaymentMethod(user_id=test_user.id, type="pse", is_principal=True))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_inactive_principal_does_not_block(db, test_user):
    db.add(PaymentMethod(user_id=test_user.id, type="cash", is_principal=True, is_active=False))
    db.add(PaymentMethod(user_id=test_user.id, type="pse", is_principal=True))
    db.commit()

    repository = RepositoryFactory.create_payment_method_repository(db)
    assert repository.get_principal(test_user.id).type == "pse"
    assert repository.count_active(test_user.id) == 1


def test_clear_principal(db, test_user):
    db.add(PaymentMethod(user_id=test_user.id, type="cash", is_principal=True))
    db.commit()

    repository = RepositoryFactory.create_payment_method_repository(db)
    assert repository.clear_principal(test_user.id) == 1
    assert repository.get_principal(test_user.id) is None
