"""
Mock Store Sample Data

Fresh copies of the sample records the MockStore loads at startup.
Every function builds new objects, so re-seeding after reset() always
starts from the same state.
"""

from datetime import datetime, timedelta, timezone

from restaurant_client.schemas import (
    Customization,
    CustomizationKind,
    DeliveryType,
    DishRating,
    InboxMessage,
    MenuItem,
    MessageType,
    NutritionInfo,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    Restaurant,
    RestaurantRating,
    User,
    UserRole,
    utcnow,
)

MOCK_PASSWORD = "password123"


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone(timezone.utc)


def seed_accounts() -> list[User]:
    created = _ts("2024-01-01T00:00:00Z")
    return [
        User(id="1", email="employee@test.com", name="John Employee",
             role=UserRole.EMPLOYEE, phone="+1234567890", created_at=created),
        User(id="2", email="admin@test.com", name="Jane Admin",
             role=UserRole.ADMIN, phone="+1234567891", created_at=created),
        User(id="3", email="maria@test.com", name="Maria Employee",
             role=UserRole.EMPLOYEE, phone="+1234567892", created_at=created),
        User(id="4", email="staff@test.com", name="Sam Staff",
             role=UserRole.STAFF, phone="+1234567893", created_at=created),
    ]


def seed_restaurants() -> list[Restaurant]:
    return [
        Restaurant(
            id="1",
            name="Pizza Palace",
            description="Authentic Italian pizzas made with fresh ingredients",
            cuisine="Italian",
            address="123 Main St, Downtown",
            phone="+1-555-0101",
            email="info@pizzapalace.com",
            rating=4.5,
            total_ratings=234,
            delivery_time="25-35 min",
            is_active=True,
            created_at=_ts("2024-01-15T08:00:00Z"),
            updated_at=_ts("2024-03-20T14:30:00Z"),
        ),
        Restaurant(
            id="2",
            name="Burger Barn",
            description="Gourmet burgers and crispy fries",
            cuisine="American",
            address="456 Oak Ave, Midtown",
            phone="+1-555-0102",
            email="hello@burgerbarn.com",
            rating=4.2,
            total_ratings=189,
            delivery_time="20-30 min",
            is_active=True,
            created_at=_ts("2024-02-01T09:15:00Z"),
            updated_at=_ts("2024-03-18T16:45:00Z"),
        ),
        Restaurant(
            id="3",
            name="Sushi Zen",
            description="Fresh sushi and Japanese cuisine",
            cuisine="Japanese",
            address="789 Pine St, Uptown",
            phone="+1-555-0103",
            email="orders@sushizen.com",
            rating=4.8,
            total_ratings=156,
            delivery_time="30-40 min",
            is_active=True,
            created_at=_ts("2024-01-20T10:30:00Z"),
            updated_at=_ts("2024-03-22T11:20:00Z"),
        ),
    ]


def _pizza_customizations() -> list[Customization]:
    return [
        Customization(id="size", name="Size", kind=CustomizationKind.SINGLE_CHOICE,
                      required=True, options=['Medium (12")', 'Large (14")']),
        Customization(id="crust", name="Crust", kind=CustomizationKind.SINGLE_CHOICE,
                      required=False, options=["Classic", "Thin Crust"]),
        Customization(id="toppings", name="Extra toppings",
                      kind=CustomizationKind.MULTI_CHOICE, required=False,
                      options=["Basil", "Mushrooms", "Olives", "Extra cheese"]),
        Customization(id="note", name="Kitchen note",
                      kind=CustomizationKind.FREE_TEXT, required=False),
    ]


def seed_menus() -> dict[str, list[MenuItem]]:
    return {
        "1": [
            MenuItem(
                id="1", restaurant_id="1", name="Margherita Pizza",
                description="Classic pizza with fresh mozzarella, basil, and tomato sauce",
                price=18.99, category="pizza", is_available=True, preparation_time=15,
                image_url="https://images.unsplash.com/photo-1604382355076-af4b0eb60143?w=400",
                allergens=["gluten", "dairy"],
                nutrition_info=NutritionInfo(calories=320, protein=12, carbs=35, fat=14),
                customizations=_pizza_customizations(),
            ),
            MenuItem(
                id="2", restaurant_id="1", name="Pepperoni Pizza",
                description="Traditional pepperoni pizza with mozzarella cheese",
                price=21.99, category="pizza", is_available=True, preparation_time=15,
                image_url="https://images.unsplash.com/photo-1628840042765-356cda07504e?w=400",
                allergens=["gluten", "dairy"],
                nutrition_info=NutritionInfo(calories=380, protein=16, carbs=36, fat=18),
                customizations=_pizza_customizations(),
            ),
        ],
        "2": [
            MenuItem(
                id="3", restaurant_id="2", name="Classic Cheeseburger",
                description="Beef patty with cheddar cheese, lettuce, tomato, and special sauce",
                price=14.99, category="main", is_available=True, preparation_time=12,
                image_url="https://images.unsplash.com/photo-1568901346375-23c9450c58cd?w=400",
                allergens=["gluten", "dairy"],
                nutrition_info=NutritionInfo(calories=520, protein=28, carbs=42, fat=26),
            ),
            MenuItem(
                id="4", restaurant_id="2", name="Crispy Fries",
                description="Golden crispy french fries with sea salt",
                price=6.99, category="side", is_available=True, preparation_time=8,
                image_url="https://images.unsplash.com/photo-1573080496219-bb080dd4f877?w=400",
                nutrition_info=NutritionInfo(calories=280, protein=4, carbs=36, fat=14),
            ),
        ],
        "3": [
            MenuItem(
                id="5", restaurant_id="3", name="Salmon Sashimi",
                description="Fresh Norwegian salmon, expertly sliced",
                price=24.99, category="main", is_available=True, preparation_time=5,
                image_url="https://images.unsplash.com/photo-1579584425555-c3ce17fd4351?w=400",
                allergens=["fish"],
                nutrition_info=NutritionInfo(calories=180, protein=25, carbs=0, fat=8),
            ),
        ],
    }


def seed_orders() -> list[Order]:
    return [
        Order(
            id="1", user_id="1", restaurant_id="1", restaurant_name="Pizza Palace",
            items=[OrderItem(id="1-1", menu_item_id="1", name="Margherita Pizza",
                             price=18.99, quantity=2,
                             special_instructions="Extra basil please")],
            total_amount=37.98,
            status=OrderStatus.COMPLETED, payment_status=PaymentStatus.PAID,
            delivery_type=DeliveryType.PICKUP, payment_method="credit_card",
            notes="Please ring doorbell",
            order_date=_ts("2024-03-20T18:30:00Z"),
            estimated_ready_time=_ts("2024-03-20T19:05:00Z"),
            created_at=_ts("2024-03-20T18:30:00Z"),
            updated_at=_ts("2024-03-20T19:02:00Z"),
        ),
        Order(
            id="2", user_id="1", restaurant_id="2", restaurant_name="Burger Barn",
            items=[
                OrderItem(id="2-1", menu_item_id="3", name="Classic Cheeseburger",
                          price=14.99, quantity=1),
                OrderItem(id="2-2", menu_item_id="4", name="Crispy Fries",
                          price=6.99, quantity=1),
            ],
            total_amount=21.98,
            status=OrderStatus.PREPARING, payment_status=PaymentStatus.PAID,
            delivery_type=DeliveryType.DINE_IN, payment_method="credit_card",
            order_date=_ts("2024-03-22T12:15:00Z"),
            estimated_ready_time=_ts("2024-03-22T12:45:00Z"),
            created_at=_ts("2024-03-22T12:15:00Z"),
            updated_at=_ts("2024-03-22T12:20:00Z"),
        ),
        Order(
            id="3", user_id="1", restaurant_id="3", restaurant_name="Sushi Zen",
            items=[OrderItem(id="3-1", menu_item_id="5", name="Salmon Sashimi",
                             price=24.99, quantity=1,
                             special_instructions="Fresh wasabi on the side")],
            total_amount=24.99,
            status=OrderStatus.CONFIRMED, payment_status=PaymentStatus.PENDING,
            delivery_type=DeliveryType.PICKUP, payment_method="credit_card",
            notes="Call when arrived",
            order_date=_ts("2024-03-22T19:00:00Z"),
            estimated_ready_time=_ts("2024-03-22T19:40:00Z"),
            created_at=_ts("2024-03-22T19:00:00Z"),
            updated_at=_ts("2024-03-22T19:05:00Z"),
        ),
    ]


def seed_restaurant_ratings() -> list[RestaurantRating]:
    rows = [
        ("1", "user1", "1", "order1", 5, 4,
         "Amazing pizza! The crust was perfectly crispy and the toppings were fresh.",
         "2024-12-01T10:30:00Z"),
        ("2", "user2", "1", "order2", 4, 5,
         "Great value for money. The pasta was delicious and the portion size was generous.",
         "2024-12-02T14:15:00Z"),
        ("3", "user3", "1", "order3", 5, 3,
         "Excellent taste but a bit pricey. The service was quick and food was hot.",
         "2024-12-03T18:45:00Z"),
        ("4", "user4", "1", "order4", 3, 4,
         "Good food overall. The main course could use more seasoning.",
         "2024-12-04T12:20:00Z"),
        ("5", "user5", "1", "order5", 5, 5,
         "Outstanding! Every dish was perfect.",
         "2024-12-05T19:30:00Z"),
        ("6", "user6", "1", "order6", 2, 3,
         "Not impressed. The food was cold when it arrived.",
         "2024-12-06T15:10:00Z"),
        ("7", "user7", "1", "order7", 4, 4,
         "Solid choice for Italian food.",
         "2024-12-07T20:00:00Z"),
        ("8", "user8", "1", "order8", 5, 2,
         "Incredible taste and quality but very expensive.",
         "2024-12-08T13:30:00Z"),
        ("9", "user9", "2", "order9", 4, 4,
         "Delicious burgers! The meat was juicy and the fries were crispy.",
         "2024-12-01T16:00:00Z"),
        ("10", "user10", "2", "order10", 5, 3,
         "Amazing taste but quite expensive for a burger place.",
         "2024-12-02T20:30:00Z"),
        ("11", "user11", "3", "order11", 5, 5,
         "Authentic sushi! Fresh fish and perfectly seasoned rice.",
         "2024-12-01T13:45:00Z"),
    ]
    return [
        RestaurantRating(
            id=rid, user_id=user, restaurant_id=restaurant, order_id=order,
            taste_rating=taste, value_rating=value,
            overall_rating=(taste + value) / 2,
            comment=comment, created_at=_ts(created),
        )
        for rid, user, restaurant, order, taste, value, comment, created in rows
    ]


def seed_dish_ratings() -> list[DishRating]:
    rows = [
        ("dish_rating_1", "user1", "1", "1", "order1", 5, "2024-12-01T10:30:00Z"),
        ("dish_rating_2", "user2", "1", "1", "order2", 4, "2024-12-02T14:15:00Z"),
        ("dish_rating_3", "user3", "1", "1", "order3", 5, "2024-12-03T18:45:00Z"),
        ("dish_rating_4", "user4", "2", "1", "order4", 4, "2024-12-04T12:20:00Z"),
        ("dish_rating_5", "user5", "2", "1", "order5", 5, "2024-12-05T19:30:00Z"),
        ("dish_rating_11", "user11", "2", "1", "order11", 3, "2024-12-09T14:20:00Z"),
        ("dish_rating_6", "user6", "3", "2", "order6", 4, "2024-12-06T15:10:00Z"),
        ("dish_rating_7", "user7", "3", "2", "order7", 5, "2024-12-07T20:00:00Z"),
        ("dish_rating_8", "user8", "4", "2", "order8", 3, "2024-12-08T13:30:00Z"),
        ("dish_rating_9", "user9", "5", "3", "order9", 5, "2024-12-01T16:00:00Z"),
        ("dish_rating_10", "user10", "5", "3", "order10", 4, "2024-12-02T20:30:00Z"),
    ]
    return [
        DishRating(
            id=rid, user_id=user, dish_id=dish, restaurant_id=restaurant,
            order_id=order, rating=rating, created_at=_ts(created),
        )
        for rid, user, dish, restaurant, order, rating, created in rows
    ]


def seed_inbox() -> dict[str, list[InboxMessage]]:
    """Messages per recipient, newest first."""
    now = utcnow()

    def msg(mid, user_id, title, body, mtype, is_read, age):
        return InboxMessage(
            id=mid, user_id=user_id, title=title, message=body,
            type=mtype, is_read=is_read, created_at=now - age,
        )

    return {
        "1": [
            msg("1", "1", "Order Confirmed",
                "Your order #12345 has been confirmed and is being prepared.",
                MessageType.SUCCESS, False, timedelta(minutes=15)),
            msg("2", "1", "Pickup Update",
                "Your order #12344 will be ready for pickup in about 10 minutes.",
                MessageType.INFO, False, timedelta(minutes=45)),
            msg("3", "1", "Order Completed",
                "Your order #12343 is complete. Please rate your experience.",
                MessageType.SUCCESS, True, timedelta(hours=2)),
            msg("4", "1", "Special Offer",
                "Get 20% off your next order! Use code SAVE20 at checkout.",
                MessageType.INFO, True, timedelta(days=1)),
            msg("5", "1", "Payment Failed",
                "We were unable to process payment for order #12342.",
                MessageType.ERROR, True, timedelta(days=3)),
            msg("6", "1", "New Restaurant Available",
                'Good news! "Sakura Sushi" is now available in your area.',
                MessageType.INFO, False, timedelta(days=5)),
            msg("7", "1", "System Maintenance",
                "Our system will undergo maintenance tonight from 2 AM to 4 AM.",
                MessageType.WARNING, True, timedelta(days=7)),
        ],
        "2": [
            msg("8", "2", "Daily Report Ready",
                "Your daily sales and order report is ready for review.",
                MessageType.INFO, False, timedelta(minutes=30)),
            msg("9", "2", "Low Stock Alert",
                "Several menu items are running low on ingredients.",
                MessageType.WARNING, False, timedelta(hours=2)),
            msg("10", "2", "New Restaurant Onboarded",
                "Pizza Palace has been successfully added to the platform.",
                MessageType.SUCCESS, True, timedelta(days=1)),
        ],
    }
