from django.urls import path
from django.contrib.auth import views as auth_views
from .. import views


urlpatterns = [

    # 1. Login Page
    path('login/', auth_views.LoginView.as_view(
        template_name='registration/login.html',
        redirect_authenticated_user=True
    ), name='login'),

    # 2. Logout Action
    path('logout/', auth_views.LogoutView.as_view(next_page='home'), name='logout'),

    # 3. Registration
    path('sign-up/', views.sign_up_view, name='sign_up'),
    path('sign-up-success/', views.sign_up_success_view, name='sign_up_success'),

    # 4. Profile API
    path('api/me/', views.api_get_my_info, name='api_user_info'),
]
