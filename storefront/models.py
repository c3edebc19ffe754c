import uuid
from django.db import models
from django.conf import settings # for AUTH_USER_MODEL-safe FKs
from django.utils import timezone
from django.utils.text import slugify
from django.core.validators import MinValueValidator, MaxValueValidator
from django.core.exceptions import ValidationError

from .pricing import discount_percent


def _unique_slug(model, base, instance_pk=None, field="slug"):
    base = base or uuid.uuid4().hex[:8]
    slug = base
    counter = 1
    qs = model.objects.all()
    if instance_pk is not None:
        qs = qs.exclude(pk=instance_pk)
    while qs.filter(**{field: slug}).exists():
        slug = f"{base}-{counter}"
        counter += 1
    return slug


class Profile(models.Model):
    ROLE_CHOICES = (
        ("user", "User"),
        ("admin", "Admin"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="user", db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user} ({self.role})"

    @property
    def is_admin(self):
        return self.role == "admin"


class Category(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    slug = models.SlugField(max_length=255, unique=True)
    image_url = models.URLField(max_length=1024, blank=True, null=True)
    show_on_home = models.BooleanField(default=False, db_index=True)
    home_order = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = _unique_slug(Category, slugify(self.name)[:240], self.pk)
        super().save(*args, **kwargs)


# === PRODUCT SYSTEM ===
class Product(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=511, db_index=True)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.TextField(blank=True, null=True)
    short_description = models.TextField(blank=True, null=True)

    # Listed pricing
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    mrp = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    discount_percent = models.PositiveSmallIntegerField(null=True, blank=True)

    # Marketing pricing (filters/sorting run against base_price)
    base_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True, db_index=True)
    base_mrp = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    sale_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    discount_percentage = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True, db_index=True)
    is_new_arrival = models.BooleanField(default=False, db_index=True)
    is_hot_selling = models.BooleanField(default=False, db_index=True)
    is_featured = models.BooleanField(default=False, db_index=True)
    is_on_sale = models.BooleanField(default=False)

    images = models.JSONField(default=list, blank=True)  # ordered list of URLs
    image_url = models.URLField(max_length=1024, blank=True, null=True)
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, blank=True, related_name="products")
    is_active = models.BooleanField(default=True, db_index=True)

    # Detail page content
    specifications = models.JSONField(default=dict, blank=True)
    key_features = models.JSONField(default=list, blank=True)
    warranty_coverage = models.JSONField(default=list, blank=True)
    warranty_care = models.JSONField(default=list, blank=True)
    dimensions = models.TextField(blank=True, null=True)

    # SEO
    meta_title = models.CharField(max_length=255, blank=True, null=True)
    meta_description = models.TextField(blank=True, null=True)
    image_alt = models.CharField(max_length=255, blank=True, null=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    def clean(self):
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price cannot be negative."})

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = _unique_slug(Product, slugify(self.title)[:240], self.pk)
        if self.base_price is None:
            self.base_price = self.price
        if self.base_mrp is None:
            self.base_mrp = self.mrp
        # Derived from mrp/price only; cleared when mrp is absent or not above price
        self.discount_percent = discount_percent(self.mrp, self.price)
        super().save(*args, **kwargs)


class ProductVariant(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="variants")
    color_name = models.CharField(max_length=100)
    color_hex = models.CharField(max_length=20, blank=True, null=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    mrp = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    sku = models.CharField(max_length=100, blank=True, null=True)
    stock = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.product.title} / {self.color_name}"


class ProductVariantImage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    variant = models.ForeignKey(ProductVariant, on_delete=models.CASCADE, related_name="images")
    image_url = models.URLField(max_length=1024)
    sort_order = models.IntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sort_order", "created_at"]


# === CONTENT SYSTEM ===
class CMSPage(models.Model):
    """
    One free-form JSON document per page key (e.g. "about_page").
    The store enforces no schema; the editor's default shape does.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    page_key = models.CharField(max_length=100, unique=True)
    content = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["page_key"]
        verbose_name = "CMS Page"

    def __str__(self):
        return self.page_key


class HeroBanner(models.Model):
    MEDIA_CHOICES = (
        ("image", "Image"),
        ("video", "Video"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    media_url = models.CharField(max_length=1024)
    media_type = models.CharField(max_length=10, choices=MEDIA_CHOICES, default="image")

    # Text block
    title = models.CharField(max_length=255, blank=True, null=True)
    subtitle = models.TextField(blank=True, null=True)
    primary_button_text = models.CharField(max_length=100, blank=True, null=True)
    primary_button_link = models.CharField(max_length=500, blank=True, null=True)
    secondary_button_text = models.CharField(max_length=100, blank=True, null=True)
    secondary_button_link = models.CharField(max_length=500, blank=True, null=True)

    # Alignment overrides (null means "use the global hero setting")
    text_position = models.CharField(max_length=20, blank=True, null=True)
    vertical_alignment = models.CharField(max_length=20, blank=True, null=True)
    heading_align = models.CharField(max_length=20, blank=True, null=True)
    subheading_align = models.CharField(max_length=20, blank=True, null=True)
    button_align = models.CharField(max_length=20, blank=True, null=True)

    # Style overrides
    title_color = models.CharField(max_length=30, blank=True, null=True)
    title_font_size = models.CharField(max_length=30, blank=True, null=True)
    title_font_weight = models.CharField(max_length=30, blank=True, null=True)
    subtitle_color = models.CharField(max_length=30, blank=True, null=True)
    subtitle_font_size = models.CharField(max_length=30, blank=True, null=True)
    subtitle_font_weight = models.CharField(max_length=30, blank=True, null=True)
    text_animation = models.CharField(max_length=30, blank=True, null=True)
    content_width = models.CharField(max_length=30, blank=True, null=True)
    overlay_opacity = models.FloatField(
        null=True, blank=True,
        validators=[MinValueValidator(0.0), MaxValueValidator(1.0)],
    )

    advance_after_video = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True, db_index=True)
    order_index = models.IntegerField(default=0, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["order_index", "created_at"]

    def __str__(self):
        return self.title or f"Banner {self.id}"


class HeroSettings(models.Model):
    """
    Hard singleton for carousel behaviour and global text alignment.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    autoplay = models.BooleanField(default=True)
    autoplay_interval = models.PositiveIntegerField(default=5000)  # ms
    pause_on_hover = models.BooleanField(default=True)
    show_arrows = models.BooleanField(default=True)
    show_dots = models.BooleanField(default=True)
    transition_effect = models.CharField(max_length=30, default="fade")

    content_vertical_align = models.CharField(max_length=20, blank=True, null=True)
    content_horizontal_align = models.CharField(max_length=20, blank=True, null=True)
    heading_align = models.CharField(max_length=20, blank=True, null=True)
    subheading_align = models.CharField(max_length=20, blank=True, null=True)
    button_align = models.CharField(max_length=20, blank=True, null=True)

    singleton_lock = models.CharField(
        max_length=1, default="X", unique=True, editable=False, db_index=True
    )

    class Meta:
        verbose_name = "Hero Settings"
        verbose_name_plural = "Hero Settings"

    def __str__(self):
        return "Hero Settings"


class LegalPage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=255, unique=True)
    title = models.CharField(max_length=255)
    content = models.TextField(blank=True, null=True)
    is_published = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = _unique_slug(LegalPage, slugify(self.title)[:240], self.pk)
        super().save(*args, **kwargs)


class Testimonial(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    designation = models.CharField(max_length=255, blank=True, null=True)
    company = models.CharField(max_length=255, blank=True, null=True)
    city = models.CharField(max_length=120, blank=True, null=True)
    review_text = models.TextField()
    rating = models.PositiveSmallIntegerField(
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text="Whole-star rating from 1 to 5.",
    )
    photo_url = models.URLField(max_length=1024, blank=True, null=True)
    show_on_home = models.BooleanField(default=True, db_index=True)
    display_order = models.IntegerField(default=0, db_index=True)
    active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["display_order", "-created_at"]

    def __str__(self):
        return f"{self.name} ({self.company or self.city or ''})"


class ProductReview(models.Model):
    STATUS_CHOICES = (
        ("pending", "Pending"),
        ("approved", "Approved"),
        ("rejected", "Rejected"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="reviews")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="product_reviews")
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    title = models.CharField(max_length=255, blank=True, null=True)
    comment = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending", db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["product", "user"], name="uniq_review_per_user_product"),
        ]

    def __str__(self):
        return f"Review {self.id} ({self.status}) on {self.product_id}"


# === CART / WISHLIST ===
class CartItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart_items")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="cart_items")
    quantity = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "product"], name="uniq_cart_item_per_user_product"),
        ]


class WishlistItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="wishlist_items")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="wishlist_items")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "product"], name="uniq_wishlist_item_per_user_product"),
        ]


# === SITE DETAILS ===
class FooterSocialLink(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    platform = models.CharField(max_length=50)
    icon = models.CharField(max_length=50, blank=True, default="")
    url = models.URLField(max_length=1024)
    is_active = models.BooleanField(default=True, db_index=True)
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["display_order", "created_at"]

    def __str__(self):
        return self.platform


class ProductPageSettings(models.Model):
    """
    Hard singleton for the copy shown on every product detail page.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product_tag_label = models.CharField(max_length=100, default="Furniture")
    pricing_note = models.CharField(max_length=500, default="* GST and shipping charges extra. Bulk discounts available.")
    delivery_title = models.CharField(max_length=100, default="Check Delivery")
    pincode_placeholder = models.CharField(max_length=100, default="Enter pincode")
    delivery_button_text = models.CharField(max_length=50, default="Check")

    singleton_lock = models.CharField(
        max_length=1, default="X", unique=True, editable=False, db_index=True
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Product Page Settings"
        verbose_name_plural = "Product Page Settings"

    def __str__(self):
        return "Product Page Settings"
