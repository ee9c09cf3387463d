import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture

from canteen.access import Requester, Role
from canteen.assets import reset_storage
from canteen.notifications import get_hub, reset_hub
from canteen.notifications.fake_subscriber import RecordingSubscriber
from canteen.payments import reset_generator


@pytest.fixture(scope="session")
def canteen_bed():
    from canteen.domain import canteen
    from canteen.utils.db import drop_db, setup_db

    bed = DomainFixture(canteen)
    bed.setup()
    setup_db(canteen)
    yield bed
    drop_db(canteen)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(canteen_bed):
    with canteen_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_hub()
    reset_generator()
    reset_storage()


@pytest.fixture()
def admin():
    return Requester(user_id="staff-001", role=Role.ADMIN.value)


@pytest.fixture()
def customer():
    return Requester(user_id="cust-001", role=Role.USER.value)


@pytest.fixture()
def other_customer():
    return Requester(user_id="cust-002", role=Role.USER.value)


@pytest.fixture()
def staff_feed(admin):
    """A staff session connected to the hub."""
    feed = RecordingSubscriber("staff")
    get_hub().connect(feed, user_id=admin.user_id, role=admin.role)
    return feed


@pytest.fixture()
def customer_feed(customer):
    feed = RecordingSubscriber("customer")
    get_hub().connect(feed, user_id=customer.user_id, role=customer.role)
    return feed


@pytest.fixture()
def make_item():
    """Create items straight through the command, without hub announcements."""
    from canteen.catalog.item import Item
    from canteen.catalog.management import AddItem

    def _make(name="Samosa", price=15.0, category="snack", stock=10, **extra):
        item_id = current_domain.process(
            AddItem(name=name, price=price, category=category, stock=stock, **extra),
            asynchronous=False,
        )
        return current_domain.repository_for(Item).get(item_id)

    return _make


@pytest.fixture()
def stock_of():
    from canteen.catalog.item import Item

    def _stock(item_id) -> int:
        return current_domain.repository_for(Item).get(str(item_id)).stock

    return _stock
