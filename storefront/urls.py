from django.urls import path

from .category import (
    ShowCategoriesAPIView, ShowHomeCategoriesAPIView, ShowCategoryAPIView,
    SaveCategoryAPIView, EditCategoryAPIView, DeleteCategoryAPIView,
)
from .cms_pages import ShowCMSPageAPIView, SaveCMSPageAPIView, ShowCMSPagesAPIView
from .home_page import (
    ShowHeroAPIView, ShowHeroBannersAPIView, SaveHeroBannerAPIView, EditHeroBannerAPIView,
    DeleteHeroBannerAPIView, UpdateHeroOrderAPIView, ShowHeroSettingsAPIView,
    EditHeroSettingsAPIView, UploadHeroMediaAPIView,
)
from .legal import (
    ShowLegalPagesAPIView, ShowLegalPageAPIView, ShowAdminLegalPagesAPIView,
    SaveLegalPageAPIView, EditLegalPageAPIView, DeleteLegalPageAPIView,
)
from .order_cart import (
    ShowCartAPIView, SaveCartAPIView, EditCartAPIView, DeleteCartItemAPIView, ClearCartAPIView,
    CartWhatsAppAPIView, BuyNowAPIView,
    ShowWishlistAPIView, SaveWishlistAPIView, DeleteWishlistAPIView,
)
from .product import (
    ShowProductsAPIView, ShowProductAPIView, ShowRelatedProductsAPIView, SearchSuggestionsAPIView,
    ShowAdminProductsAPIView, SaveProductAPIView, EditProductAPIView, DeleteProductAPIView,
    SaveVariantAPIView, EditVariantAPIView, DeleteVariantAPIView,
    SaveVariantImageAPIView, DeleteVariantImageAPIView,
)
from .site_details import (
    ShowFooterLinksAPIView, ShowAdminFooterLinksAPIView, SaveFooterLinkAPIView,
    EditFooterLinkAPIView, DeleteFooterLinkAPIView,
    ShowProductPageSettingsAPIView, EditProductPageSettingsAPIView,
)
from .testimonials import (
    ShowTestimonialsAPIView, SaveTestimonialAPIView, EditTestimonialAPIView, DeleteTestimonialAPIView,
    ShowProductReviewsAPIView, SaveProductReviewAPIView, ShowAdminReviewsAPIView,
    EditReviewStatusAPIView, DeleteReviewAPIView,
)
from .utilities import UploadMediaAPIView

urlpatterns = [
    # Catalog
    path("show-products/", ShowProductsAPIView.as_view(), name="show-products"),
    path("show-product/<slug:slug>/", ShowProductAPIView.as_view(), name="show-product"),
    path("show-related-products/<slug:slug>/", ShowRelatedProductsAPIView.as_view(), name="show-related-products"),
    path("search-suggestions/", SearchSuggestionsAPIView.as_view(), name="search-suggestions"),
    path("show-admin-products/", ShowAdminProductsAPIView.as_view(), name="show-admin-products"),
    path("save-product/", SaveProductAPIView.as_view(), name="save-product"),
    path("edit-product/", EditProductAPIView.as_view(), name="edit-product"),
    path("delete-product/", DeleteProductAPIView.as_view(), name="delete-product"),
    path("save-variant/", SaveVariantAPIView.as_view(), name="save-variant"),
    path("edit-variant/", EditVariantAPIView.as_view(), name="edit-variant"),
    path("delete-variant/", DeleteVariantAPIView.as_view(), name="delete-variant"),
    path("save-variant-image/", SaveVariantImageAPIView.as_view(), name="save-variant-image"),
    path("delete-variant-image/", DeleteVariantImageAPIView.as_view(), name="delete-variant-image"),

    # Categories
    path("show-categories/", ShowCategoriesAPIView.as_view(), name="show-categories"),
    path("show-home-categories/", ShowHomeCategoriesAPIView.as_view(), name="show-home-categories"),
    path("show-category/<slug:slug>/", ShowCategoryAPIView.as_view(), name="show-category"),
    path("save-category/", SaveCategoryAPIView.as_view(), name="save-category"),
    path("edit-category/", EditCategoryAPIView.as_view(), name="edit-category"),
    path("delete-category/", DeleteCategoryAPIView.as_view(), name="delete-category"),

    # CMS pages
    path("show-cms-page/<slug:page_key>/", ShowCMSPageAPIView.as_view(), name="show-cms-page"),
    path("save-cms-page/<slug:page_key>/", SaveCMSPageAPIView.as_view(), name="save-cms-page"),
    path("show-cms-pages/", ShowCMSPagesAPIView.as_view(), name="show-cms-pages"),

    # Hero carousel
    path("show-hero/", ShowHeroAPIView.as_view(), name="show-hero"),
    path("show-hero-banners/", ShowHeroBannersAPIView.as_view(), name="show-hero-banners"),
    path("save-hero-banner/", SaveHeroBannerAPIView.as_view(), name="save-hero-banner"),
    path("edit-hero-banner/", EditHeroBannerAPIView.as_view(), name="edit-hero-banner"),
    path("delete-hero-banner/", DeleteHeroBannerAPIView.as_view(), name="delete-hero-banner"),
    path("update-hero-order/", UpdateHeroOrderAPIView.as_view(), name="update-hero-order"),
    path("show-hero-settings/", ShowHeroSettingsAPIView.as_view(), name="show-hero-settings"),
    path("edit-hero-settings/", EditHeroSettingsAPIView.as_view(), name="edit-hero-settings"),
    path("upload-hero-media/", UploadHeroMediaAPIView.as_view(), name="upload-hero-media"),

    # Cart / wishlist
    path("show-cart/", ShowCartAPIView.as_view(), name="show-cart"),
    path("save-cart/", SaveCartAPIView.as_view(), name="save-cart"),
    path("edit-cart/", EditCartAPIView.as_view(), name="edit-cart"),
    path("delete-cart-item/", DeleteCartItemAPIView.as_view(), name="delete-cart-item"),
    path("clear-cart/", ClearCartAPIView.as_view(), name="clear-cart"),
    path("cart-whatsapp/", CartWhatsAppAPIView.as_view(), name="cart-whatsapp"),
    path("buy-now/<slug:slug>/", BuyNowAPIView.as_view(), name="buy-now"),
    path("show-wishlist/", ShowWishlistAPIView.as_view(), name="show-wishlist"),
    path("save-wishlist/", SaveWishlistAPIView.as_view(), name="save-wishlist"),
    path("delete-wishlist/", DeleteWishlistAPIView.as_view(), name="delete-wishlist"),

    # Testimonials / reviews
    path("show-testimonials/", ShowTestimonialsAPIView.as_view(), name="show-testimonials"),
    path("save-testimonial/", SaveTestimonialAPIView.as_view(), name="save-testimonial"),
    path("edit-testimonial/", EditTestimonialAPIView.as_view(), name="edit-testimonial"),
    path("delete-testimonial/", DeleteTestimonialAPIView.as_view(), name="delete-testimonial"),
    path("show-product-reviews/<slug:slug>/", ShowProductReviewsAPIView.as_view(), name="show-product-reviews"),
    path("save-product-review/", SaveProductReviewAPIView.as_view(), name="save-product-review"),
    path("show-admin-reviews/", ShowAdminReviewsAPIView.as_view(), name="show-admin-reviews"),
    path("edit-review-status/", EditReviewStatusAPIView.as_view(), name="edit-review-status"),
    path("delete-review/", DeleteReviewAPIView.as_view(), name="delete-review"),

    # Legal pages
    path("show-legal-pages/", ShowLegalPagesAPIView.as_view(), name="show-legal-pages"),
    path("show-legal-page/<slug:slug>/", ShowLegalPageAPIView.as_view(), name="show-legal-page"),
    path("show-admin-legal-pages/", ShowAdminLegalPagesAPIView.as_view(), name="show-admin-legal-pages"),
    path("save-legal-page/", SaveLegalPageAPIView.as_view(), name="save-legal-page"),
    path("edit-legal-page/", EditLegalPageAPIView.as_view(), name="edit-legal-page"),
    path("delete-legal-page/", DeleteLegalPageAPIView.as_view(), name="delete-legal-page"),

    # Site details
    path("show-footer-links/", ShowFooterLinksAPIView.as_view(), name="show-footer-links"),
    path("show-admin-footer-links/", ShowAdminFooterLinksAPIView.as_view(), name="show-admin-footer-links"),
    path("save-footer-link/", SaveFooterLinkAPIView.as_view(), name="save-footer-link"),
    path("edit-footer-link/", EditFooterLinkAPIView.as_view(), name="edit-footer-link"),
    path("delete-footer-link/", DeleteFooterLinkAPIView.as_view(), name="delete-footer-link"),
    path("show-product-page-settings/", ShowProductPageSettingsAPIView.as_view(), name="show-product-page-settings"),
    path("edit-product-page-settings/", EditProductPageSettingsAPIView.as_view(), name="edit-product-page-settings"),

    # Media
    path("upload-media/", UploadMediaAPIView.as_view(), name="upload-media"),
]
