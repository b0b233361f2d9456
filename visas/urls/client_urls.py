from django.urls import path
from .. import views


urlpatterns = [
    # --- PAGES ---
    # Visa type page (fees, requirements, FAQs)
    path('<int:pk>/', views.visa_detail_view, name='visa_detail'),

    # Application wizard (e.g., /visas/5/apply/)
    path('<int:pk>/apply/', views.visa_apply_view, name='visa_apply'),

    # --- APIs ---
    # Search: countries with their visa types
    path('api/countries/', views.visa_search_api, name='api_visa_search'),

    # Visa type detail for the drawer/page
    path('api/<int:pk>/', views.visa_detail_api, name='api_visa_detail'),

    # Form schema: ordered dynamic fields of a country
    path('api/schema/<int:country_id>/',
         views.get_visa_schema, name='api_visa_schema'),
]
