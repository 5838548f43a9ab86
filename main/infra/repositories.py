"""
Infrastructure repositories for domain entities.
"""
from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from django.db.models import Avg

from main.domain.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    ShippingInfo,
)
from main.domain.product import Product
from main.domain.review import Review
from main.infra.models import (
    OrderItemORM,
    OrderORM,
    ProductORM,
    ReviewORM,
    UserORM,
)


class UserRepository:
    """Repository for users (lookup only)."""

    def exists(self, user_id: UUID) -> bool:
        return UserORM.objects.filter(id=user_id).exists()

    def get_by_id(self, user_id: UUID) -> UserORM | None:
        """Get user by ID."""
        return UserORM.objects.filter(id=user_id).first()

    def create(self, first_name: str, email: str, last_name: str = "") -> UUID:
        """Create new user."""
        user = UserORM.objects.create(
            first_name=first_name,
            last_name=last_name,
            email=email,
        )
        return user.id


class ProductRepository:
    """Repository for Product records."""

    def get_by_id(self, product_id: UUID, for_update: bool = False) -> Product | None:
        """Get product by ID, optionally row-locking it for the current transaction."""
        queryset = ProductORM.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        product_orm = queryset.filter(id=product_id).first()
        if product_orm is None:
            return None
        return self._to_domain(product_orm)

    def lock_many(self, product_ids: list[UUID]) -> dict[UUID, Product]:
        """Row-lock several products in a fixed (sorted) order to avoid deadlocks."""
        products_orm = (
            ProductORM.objects
            .select_for_update()
            .filter(id__in=set(product_ids))
            .order_by("id")
        )
        return {product_orm.id: self._to_domain(product_orm) for product_orm in products_orm}

    def list_ids(self) -> list[UUID]:
        return list(ProductORM.objects.order_by("id").values_list("id", flat=True))

    def save(self, product: Product) -> Product:
        """Save product (all mutable ledger fields)."""
        ProductORM.objects.update_or_create(
            id=product.id,
            defaults={
                "name": product.name,
                "sku": product.sku,
                "price": product.price,
                "sale_price": product.sale_price,
                "stock_quantity": product.stock_quantity,
                "is_available": product.is_available,
                "average_rating": product.average_rating,
            },
        )
        return product

    def update_average_rating(self, product_id: UUID, rating: Decimal) -> bool:
        """Overwrite the denormalized rating; False when the product is missing."""
        updated = ProductORM.objects.filter(id=product_id).update(average_rating=rating)
        return updated > 0

    def create(
        self,
        name: str,
        price: Decimal,
        stock_quantity: int = 0,
        sale_price: Decimal | None = None,
        sku: str = "",
        is_available: bool = True,
    ) -> Product:
        """Create new product."""
        product = Product(
            name=name,
            sku=sku,
            price=price,
            sale_price=sale_price,
            stock_quantity=stock_quantity,
            is_available=is_available,
        )
        return self.save(product)

    def _to_domain(self, product_orm: ProductORM) -> Product:
        """Convert ORM model to domain entity."""
        return Product(
            id=product_orm.id,
            name=product_orm.name,
            sku=product_orm.sku,
            price=product_orm.price,
            sale_price=product_orm.sale_price,
            stock_quantity=product_orm.stock_quantity,
            is_available=product_orm.is_available,
            average_rating=product_orm.average_rating,
        )


class OrderRepository:
    """Repository for Order aggregate."""

    def get_by_id(self, order_id: UUID, for_update: bool = False) -> Order | None:
        """Get order by ID with items (no N+1)."""
        queryset = OrderORM.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        order_orm = queryset.prefetch_related("items").filter(id=order_id).first()
        if order_orm is None:
            return None
        return self._to_domain(order_orm)

    def get_by_number(self, order_number: str) -> Order | None:
        """Get order by its human readable number."""
        order_orm = (
            OrderORM.objects
            .prefetch_related("items")
            .filter(order_number=order_number)
            .first()
        )
        if order_orm is None:
            return None
        return self._to_domain(order_orm)

    def get_by_user(self, user_id: UUID, limit: int = 50, offset: int = 0) -> list[Order]:
        """Get orders by user with pagination, newest first."""
        orders_orm = (
            OrderORM.objects
            .filter(user_id=user_id)
            .prefetch_related("items")
            .order_by("-order_date")[offset:offset + limit]
        )
        return [self._to_domain(order_orm) for order_orm in orders_orm]

    def number_exists(self, order_number: str) -> bool:
        return OrderORM.objects.filter(order_number=order_number).exists()

    def list_items_by_order(self, order_id: UUID) -> list[OrderItem]:
        """Get the line items owned by an order."""
        items_orm = OrderItemORM.objects.filter(order_id=order_id).order_by("position")
        return [self._item_to_domain(item_orm) for item_orm in items_orm]

    def save(self, order: Order) -> Order:
        """Save order header. Items are written once, through add_item."""
        shipping = order.shipping or ShippingInfo("", "", "", "", "")
        OrderORM.objects.update_or_create(
            id=order.id,
            defaults={
                "order_number": order.order_number,
                "order_date": order.order_date,
                "user_id": order.user_id,
                "total_amount": order.total_amount,
                "order_status": order.order_status.value,
                "payment_status": order.payment_status.value,
                "payment_method": order.payment_method,
                "shipping_address": shipping.address,
                "city": shipping.city,
                "state": shipping.state,
                "zip_code": shipping.zip_code,
                "country": shipping.country,
                "shipping_method": shipping.method,
                "tracking_number": order.tracking_number,
                "shipping_carrier": order.shipping_carrier,
            },
        )
        return order

    def add_item(self, order_id: UUID, item: OrderItem, position: int) -> OrderItem:
        """Persist a line item snapshot at its position in the cart."""
        OrderItemORM.objects.create(
            id=item.id,
            order_id=order_id,
            position=position,
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            discount_amount=item.discount_amount,
            subtotal=item.subtotal,
        )
        return item

    def _item_to_domain(self, item_orm: OrderItemORM) -> OrderItem:
        return OrderItem(
            id=item_orm.id,
            product_id=item_orm.product_id,
            quantity=item_orm.quantity,
            unit_price=item_orm.unit_price,
            discount_amount=item_orm.discount_amount,
        )

    def _to_domain(self, order_orm: OrderORM) -> Order:
        """Convert ORM model to domain entity."""
        items = [
            self._item_to_domain(item_orm)
            for item_orm in sorted(order_orm.items.all(), key=lambda item_orm: item_orm.position)
        ]
        return Order(
            id=order_orm.id,
            order_number=order_orm.order_number,
            user_id=order_orm.user_id,
            shipping=ShippingInfo(
                address=order_orm.shipping_address,
                city=order_orm.city,
                state=order_orm.state,
                zip_code=order_orm.zip_code,
                country=order_orm.country,
                method=order_orm.shipping_method,
            ),
            payment_method=order_orm.payment_method,
            items=items,
            order_status=OrderStatus(order_orm.order_status),
            payment_status=PaymentStatus(order_orm.payment_status),
            order_date=order_orm.order_date,
            total_amount=order_orm.total_amount,
            tracking_number=order_orm.tracking_number,
            shipping_carrier=order_orm.shipping_carrier,
        )


class ReviewRepository:
    """Repository for reviews in the review store."""

    def get_by_id(self, review_id: UUID) -> Review | None:
        review_orm = ReviewORM.objects.filter(id=review_id).first()
        if review_orm is None:
            return None
        return self._to_domain(review_orm)

    def list_by_product(self, product_id: UUID) -> list[Review]:
        reviews_orm = ReviewORM.objects.filter(product_id=product_id).order_by("-created_at")
        return [self._to_domain(review_orm) for review_orm in reviews_orm]

    def list_by_user(self, user_id: UUID) -> list[Review]:
        reviews_orm = ReviewORM.objects.filter(user_id=user_id).order_by("-created_at")
        return [self._to_domain(review_orm) for review_orm in reviews_orm]

    def save(self, review: Review) -> Review:
        """Insert or update a review and refresh its timestamps."""
        review_orm, _ = ReviewORM.objects.update_or_create(
            id=review.id,
            defaults={
                "product_id": review.product_id,
                "user_id": review.user_id,
                "username": review.username,
                "rating": review.rating,
                "title": review.title,
                "comment": review.comment,
                "pros": review.pros,
                "cons": review.cons,
                "images": review.images,
                "is_verified_purchase": review.is_verified_purchase,
                "helpful_votes": review.helpful_votes,
            },
        )
        review.created_at = review_orm.created_at
        review.updated_at = review_orm.updated_at
        return review

    def delete(self, review_id: UUID) -> bool:
        deleted, _ = ReviewORM.objects.filter(id=review_id).delete()
        return deleted > 0

    def count_by_product(self, product_id: UUID) -> int:
        return ReviewORM.objects.filter(product_id=product_id).count()

    def average_rating_by_product(self, product_id: UUID) -> Decimal | None:
        """Mean rating computed by the store; None when there are no reviews."""
        average = (
            ReviewORM.objects
            .filter(product_id=product_id)
            .aggregate(average=Avg("rating"))["average"]
        )
        if average is None:
            return None
        # Avg over integers comes back as float; str() keeps its shortest repr.
        return Decimal(str(average))

    def _to_domain(self, review_orm: ReviewORM) -> Review:
        """Convert ORM model to domain entity."""
        return Review(
            id=review_orm.id,
            product_id=review_orm.product_id,
            user_id=review_orm.user_id,
            rating=review_orm.rating,
            username=review_orm.username,
            title=review_orm.title,
            comment=review_orm.comment,
            pros=review_orm.pros,
            cons=review_orm.cons,
            images=review_orm.images,
            is_verified_purchase=review_orm.is_verified_purchase,
            helpful_votes=review_orm.helpful_votes,
            created_at=review_orm.created_at,
            updated_at=review_orm.updated_at,
        )
