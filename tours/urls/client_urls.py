from django.urls import path
from .. import views


urlpatterns = [
    # --- PAGES ---
    path('<int:pk>/', views.tour_detail_view, name='tour_detail'),
    path('<int:pk>/book/', views.tour_book_view, name='tour_book'),

    # --- APIs ---
    path('api/packages/', views.tour_search_api, name='api_tour_search'),
]
