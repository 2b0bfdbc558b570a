from django.urls import path
from . import views

urlpatterns = [
    # DFA checks
    path('api/validate-dfa/', views.validate_dfa_view, name='validate_dfa'),
    path('api/check-empty/', views.check_empty, name='check_empty'),

    # DFA -> TM compilation
    path('api/dfa-to-tm/', views.convert_dfa_to_tm, name='dfa_to_tm'),

    # TM simulation, whole run or streamed step by step
    path('api/simulate-tm/', views.simulate_tm_view, name='simulate_tm'),
    path('api/simulate-tm-stream/', views.simulate_tm_stream, name='simulate_tm_stream'),
]
