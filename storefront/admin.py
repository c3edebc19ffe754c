from django.contrib import admin
from .models import (
    Profile,
    Category, Product, ProductVariant, ProductVariantImage,
    CMSPage, HeroBanner, HeroSettings, LegalPage,
    Testimonial, ProductReview,
    CartItem, WishlistItem,
    FooterSocialLink, ProductPageSettings,
)

admin.site.register(Profile)

admin.site.register(Category)
admin.site.register(Product)
admin.site.register(ProductVariant)
admin.site.register(ProductVariantImage)

admin.site.register(CMSPage)
admin.site.register(HeroBanner)
admin.site.register(HeroSettings)
admin.site.register(LegalPage)

admin.site.register(Testimonial)
admin.site.register(ProductReview)

admin.site.register(CartItem)
admin.site.register(WishlistItem)

admin.site.register(FooterSocialLink)
admin.site.register(ProductPageSettings)
